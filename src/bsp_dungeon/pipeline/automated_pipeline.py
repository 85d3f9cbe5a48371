"""
Automated pipeline for batch dungeon generation.

Orchestrates layout generation, validation and output writing (JSON layout,
Graphviz tree dump, ASCII preview). Each layout in a batch gets its own
seed derived from the batch seed, so a whole batch is reproducible.
"""

import dataclasses
import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..conversion.layout_export import layout_to_json
from ..conversion.occupancy_grid import build_occupancy_grid, render_ascii
from ..generators.bsp.dungeon_generator import DungeonLayout, generate
from ..generators.bsp.settings import DungeonSettings
from ..validation.checks.layout_checks import validate_layout
from ..validation.core import ValidationError, ValidationResult
from .debug.graph_export import derive_seed, export_tree_dot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    INITIALIZE = "initialize"
    GENERATE_LAYOUT = "generate_layout"
    VALIDATE = "validate"
    WRITE_OUTPUT = "write_output"
    COMPLETE = "complete"


OUTPUT_FORMATS = ('json', 'dot', 'txt')


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PipelineError(Exception):
    pass


# ---------------------------------------------------------------------------
# Settings / Result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class PipelineSettings:
    dungeon: DungeonSettings = field(default_factory=DungeonSettings)

    # Batch
    count: int = 1

    # Output; None output_dir = keep layouts in memory only
    output_dir: Optional[str] = None
    name: str = "dungeon"
    formats: List[str] = field(default_factory=lambda: ['json'])

    # Validation
    validate: bool = True
    fail_fast: bool = False


@dataclass
class PipelineProgress:
    stage: PipelineStage
    stage_progress: float
    overall_progress: float
    message: str
    elapsed_time: float

    @property
    def percentage(self) -> int:
        return int(self.overall_progress * 100)


@dataclass
class PipelineResult:
    success: bool
    layouts: List[DungeonLayout] = field(default_factory=list)
    validation: List[ValidationResult] = field(default_factory=list)
    output_files: List[str] = field(default_factory=list)
    stages_completed: List[PipelineStage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_time(self) -> float:
        return self.metrics.get("total_time", 0.0)

    def add_error(self, error: str, stage: Optional[PipelineStage] = None):
        if stage:
            error = f"[{stage.value}] {error}"
        self.errors.append(error)

    def add_warning(self, warning: str, stage: Optional[PipelineStage] = None):
        if stage:
            warning = f"[{stage.value}] {warning}"
        self.warnings.append(warning)


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

class AutomatedPipeline:
    """Generates, validates and writes one or more dungeon layouts."""

    STAGE_WEIGHTS = {
        PipelineStage.INITIALIZE: 0.05,
        PipelineStage.GENERATE_LAYOUT: 0.55,
        PipelineStage.VALIDATE: 0.15,
        PipelineStage.WRITE_OUTPUT: 0.25,
    }

    def __init__(self, settings: Optional[PipelineSettings] = None,
                 progress_callback: Optional[Callable[[PipelineProgress], None]] = None):
        self.settings = settings or PipelineSettings()
        self.progress_callback = progress_callback
        self.current_stage = PipelineStage.INITIALIZE
        self.start_time = time.time()
        self._validate_settings()

    # -- helpers --

    def _validate_settings(self):
        self.settings.dungeon.validate()
        errors = []
        if self.settings.count < 1:
            errors.append("count must be at least 1")
        unknown = [f for f in self.settings.formats if f not in OUTPUT_FORMATS]
        if unknown:
            errors.append(f"Unknown output format(s): {', '.join(unknown)}")
        if self.settings.formats and self.settings.output_dir is None:
            logger.debug("No output_dir set, layouts are kept in memory only")
        if errors:
            raise PipelineError(f"Invalid settings: {'; '.join(errors)}")

    def _update_progress(self, stage_progress: float, message: str):
        stages = list(self.STAGE_WEIGHTS.keys())
        if self.current_stage not in stages:
            overall = 1.0
        else:
            idx = stages.index(self.current_stage)
            completed = sum(self.STAGE_WEIGHTS[s] for s in stages[:idx])
            overall = completed + self.STAGE_WEIGHTS[self.current_stage] * stage_progress

        if self.progress_callback:
            self.progress_callback(PipelineProgress(
                stage=self.current_stage,
                stage_progress=stage_progress,
                overall_progress=min(overall, 1.0),
                message=message,
                elapsed_time=time.time() - self.start_time,
            ))

    def _layout_name(self, index: int) -> str:
        if self.settings.count == 1:
            return self.settings.name
        return f"{self.settings.name}_{index:03d}"

    # -- stages --

    def _resolve_seed(self) -> int:
        self.current_stage = PipelineStage.INITIALIZE
        self._update_progress(0.0, "Resolving seed...")
        if self.settings.dungeon.seed is not None:
            seed = self.settings.dungeon.seed
        else:
            seed = random.SystemRandom().randint(0, 2**31 - 1)
        logger.info(f"Generation seed: {seed}")
        self._update_progress(1.0, "Initialization complete")
        return seed

    def _generate_layouts(self, batch_seed: int) -> List[DungeonLayout]:
        self.current_stage = PipelineStage.GENERATE_LAYOUT
        layouts = []
        for index in range(self.settings.count):
            seed = batch_seed if self.settings.count == 1 else derive_seed(batch_seed, index)
            settings = dataclasses.replace(self.settings.dungeon, seed=seed)
            layouts.append(generate(settings))
            self._update_progress((index + 1) / self.settings.count,
                                  f"Generated layout {index + 1}/{self.settings.count}")
        return layouts

    def _validate_layouts(self, layouts: List[DungeonLayout], result: PipelineResult):
        self.current_stage = PipelineStage.VALIDATE
        for index, layout in enumerate(layouts):
            validation = validate_layout(layout)
            result.validation.append(validation)
            for issue in validation.infos:
                logger.debug(str(issue))
            for issue in validation.warnings:
                logger.warning(str(issue))
                result.add_warning(f"{self._layout_name(index)}: {issue.message}", self.current_stage)
            if validation.failed:
                for issue in validation.errors:
                    result.add_error(f"{self._layout_name(index)}: {issue.message}", self.current_stage)
                if self.settings.fail_fast:
                    logger.error(f"Validation failed for {self._layout_name(index)}: "
                                 f"{len(validation.errors)} errors")
                    raise ValidationError(validation)
            self._update_progress((index + 1) / len(layouts), f"Validated layout {index + 1}")

    def _write_outputs(self, layouts: List[DungeonLayout], result: PipelineResult):
        self.current_stage = PipelineStage.WRITE_OUTPUT
        if self.settings.output_dir is None or not self.settings.formats:
            return

        out_dir = Path(self.settings.output_dir)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            for index, layout in enumerate(layouts):
                name = self._layout_name(index)
                for fmt in self.settings.formats:
                    path = out_dir / f"{name}.{fmt}"
                    path.write_text(self._render(layout, fmt), encoding='utf-8')
                    result.output_files.append(str(path))
                    logger.info(f"Written: {path}")
                self._update_progress((index + 1) / len(layouts), f"Wrote {name}")
        except OSError as e:
            raise PipelineError(f"Failed to write output: {e}") from e

    @staticmethod
    def _render(layout: DungeonLayout, fmt: str) -> str:
        if fmt == 'json':
            return layout_to_json(layout)
        if fmt == 'dot':
            return export_tree_dot(layout)
        return render_ascii(build_occupancy_grid(layout)) + '\n'

    # -- main entry --

    def run(self) -> PipelineResult:
        """
        Run the whole pipeline.

        Returns:
            PipelineResult; success is False when a layout failed validation
            or outputs could not be written

        Raises:
            ValidationError: If fail_fast is set and a layout fails validation
        """
        result = PipelineResult(success=False)
        self.start_time = time.time()

        seed = self._resolve_seed()
        result.metrics['seed'] = seed
        result.stages_completed.append(PipelineStage.INITIALIZE)

        logger.info(f"Starting generation of {self.settings.count} layout(s)")
        result.layouts = self._generate_layouts(seed)
        result.stages_completed.append(PipelineStage.GENERATE_LAYOUT)

        if self.settings.validate:
            self._validate_layouts(result.layouts, result)
            result.stages_completed.append(PipelineStage.VALIDATE)

        try:
            self._write_outputs(result.layouts, result)
            result.stages_completed.append(PipelineStage.WRITE_OUTPUT)
        except PipelineError as e:
            result.add_error(str(e), self.current_stage)
            return result

        self.current_stage = PipelineStage.COMPLETE
        result.stages_completed.append(PipelineStage.COMPLETE)
        result.success = not result.errors
        result.metrics['total_time'] = time.time() - self.start_time
        result.metrics['room_count'] = sum(len(layout.rooms) for layout in result.layouts)
        result.metrics['corridor_count'] = sum(len(layout.corridors) for layout in result.layouts)
        logger.info(f"Pipeline complete in {result.total_time:.2f}s")
        return result
