"""
run_gallery.py: CLI Entry Point

Forwards execution to the command-line logic defined in
`src/wedding_gallery/cli.py`.

Usage:
    python run_gallery.py layout path/to/gallery.toml --layout masonry

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_gallery.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import wedding_gallery.cli as wg_cli

if __name__ == "__main__":
    wg_cli.main()
