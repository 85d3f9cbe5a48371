"""
Dungeon Generation Pipeline Module.

Provides batch layout generation, validation and file output.
"""

from .automated_pipeline import (
    AutomatedPipeline,
    OUTPUT_FORMATS,
    PipelineSettings,
    PipelineResult,
    PipelineProgress,
    PipelineStage,
    PipelineError,
)

__all__ = [
    'AutomatedPipeline',
    'OUTPUT_FORMATS',
    'PipelineSettings',
    'PipelineResult',
    'PipelineProgress',
    'PipelineStage',
    'PipelineError',
]
