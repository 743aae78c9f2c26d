"""
This test loads the run_gallery.py script using importlib.

run_gallery.py is a top-level script, not part of the src/ package, so
it is loaded from its file path rather than imported by name.
"""
from __future__ import annotations

import importlib.util
import json
import subprocess
import sys
from pathlib import Path
from unittest import mock

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "run_gallery.py"


@pytest.mark.integration
def test_script_main_entry() -> None:
    """Integration test: execute the wrapper via subprocess."""
    result = subprocess.run(  # noqa: S603
        [sys.executable, str(SCRIPT), "tiers", "--tier", "gold"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        timeout=60,
        check=False,
    )

    assert result.returncode == 0, (
        f"Script failed:\nSTDOUT: {result.stdout}\nSTDERR: {result.stderr}"
    )
    assert "masonry" in json.loads(result.stdout)["available"]


def test_run_gallery_not_main() -> None:
    """Loading run_gallery.py without __main__ does not start the CLI."""
    spec = importlib.util.spec_from_file_location("run_gallery", SCRIPT)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)

    with (
        mock.patch("wedding_gallery.cli.main") as mock_main,
        mock.patch.object(sys, "path", sys.path.copy()),
    ):
        spec.loader.exec_module(module)
        mock_main.assert_not_called()
    assert module.__name__ != "__main__"
