#!/usr/bin/env python3
"""
BSP Dungeon - Main Entry Point

Runs the command line generator from a source checkout without installing.
"""

import sys
from pathlib import Path


def main():
    src_root = Path(__file__).parent / "src"
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))

    from bsp_dungeon.cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
