"""
run_collage.py: CLI entry point

Forwards execution to the CLI defined in `src/live_collage/cli.py` so
the tool runs without installing the package or editing PYTHONPATH.

Usage:
    python run_collage.py --photos a.jpg b.jpg c.jpg [options]

For help on available options, run:
    python run_collage.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import live_collage.cli as lc_cli

if __name__ == "__main__":
    raise SystemExit(lc_cli.main())
