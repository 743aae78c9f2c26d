# tests/test_cli.py
"""
Tests for the CLI parser and execution logic.

Modules tested:
- build_arg_parser()
- run_from_args()
- main()

Manifests and configs are written to tmp_path; JSON output is read
back from stdout or from the ``--output`` file.
"""

from __future__ import annotations

import argparse
import datetime as dt
import json
import os
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

import wedding_gallery.cli as wg_cli

if TYPE_CHECKING:
    from collections.abc import Callable

    from _pytest.capture import CaptureFixture
    from _pytest.logging import LogCaptureFixture
    from _pytest.monkeypatch import MonkeyPatch

    WriteToml = Callable[[dict[str, Any], str], Path]


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    """Eight images in two categories plus one dated event."""
    return {
        "tier": "gold",
        "images": [
            {
                "id": f"m{i}",
                "url": f"https://cdn.example/m{i}.jpg",
                "category": "couple" if i % 2 else "family",
            }
            for i in range(8)
        ],
        "events": [
            {"id": "e1", "name": "Family", "date": dt.date(2024, 4, 1)},
        ],
    }


@pytest.fixture
def manifest_path(
    write_toml: WriteToml,
    manifest_data: dict[str, Any],
) -> Path:
    return write_toml(manifest_data, "gallery-manifest.toml")


class TestCLIArgumentParsing:
    """Unit tests for CLI flag parsing."""

    def test_layout_arguments(self) -> None:
        parser = wg_cli.build_arg_parser()
        args = parser.parse_args([
            "layout", "m.toml",
            "--layout", "masonry",
            "--category", "couple",
            "--width", "700",
        ])
        assert args.command == "layout"
        assert args.manifest == "m.toml"
        assert args.layout == "masonry"
        assert args.category == "couple"
        assert args.width == 700  # noqa: PLR2004
        assert "gap" not in vars(args)
        assert args.regenerate == 0

    def test_unknown_layout_rejected(self) -> None:
        parser = wg_cli.build_arg_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["layout", "m.toml", "--layout", "spiral"])

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            wg_cli.main([])
        assert excinfo.value.code == 2  # noqa: PLR2004

    def test_validate_only_requires_config(self) -> None:
        with pytest.raises(SystemExit):
            wg_cli.main(["--validate-config-only"])

    def test_version_flag(self, capsys: CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            wg_cli.main(["--version"])
        assert excinfo.value.code == 0
        assert capsys.readouterr().out.startswith("wedding-gallery ")


class TestCLIRunFromArgs:
    """Config loading, overrides and subcommands."""

    def test_config_only_mode(
        self,
        write_toml: WriteToml,
        caplog: LogCaptureFixture,
    ) -> None:
        config_path = write_toml({"layout": {"gap": 8}}, "gallery.toml")
        args = argparse.Namespace(
            config=str(config_path),
            validate_config_only=True,
            command=None,
        )
        with caplog.at_level("INFO"):
            assert wg_cli.run_from_args(args) == wg_cli.EXIT_OK
        assert "validated successfully" in caplog.text

    def test_tiers_listing(self, capsys: CaptureFixture[str]) -> None:
        wg_cli.main(["tiers", "--tier", "silver"])
        data = json.loads(capsys.readouterr().out)
        assert [t["tier"] for t in data["tiers"]] == [
            "free", "silver", "gold", "platinum",
        ]
        assert data["tiers"][0]["price"] == "Free"
        assert data["available"] == [
            "grid", "single_carousel", "multi_carousel",
        ]
        assert data["upgrade"]["tier"] == "gold"
        assert "₹999" in data["upgrade"]["message"]

    def test_layout_to_file(
        self,
        manifest_path: Path,
        tmp_path: Path,
    ) -> None:
        out = tmp_path / "out" / "layout.json"
        wg_cli.main([
            "layout", str(manifest_path),
            "--layout", "masonry",
            "--category", "couple",
            "--output", str(out),
        ])
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["tier"] == "gold"
        assert data["category"] == "couple"
        assert data["breakpoint"] == "desktop"
        layout = data["layout"]
        assert layout["kind"] == "masonry"
        assert layout["sequence"] == ["m1", "m3", "m5", "m7"]
        assert {item["image_id"] for item in layout["items"]} == {
            "m1", "m3", "m5", "m7",
        }

    def test_cli_overrides_config(
        self,
        manifest_path: Path,
        write_toml: WriteToml,
        capsys: CaptureFixture[str],
    ) -> None:
        config_path = write_toml(
            {"layout": {"container_width": 1400, "gap": 4}}, "gallery.toml",
        )
        wg_cli.main([
            "--config", str(config_path),
            "layout", str(manifest_path),
            "--layout", "grid",
            "--width", "500",
        ])
        data = json.loads(capsys.readouterr().out)
        assert data["breakpoint"] == "mobile"
        first, second = data["layout"]["items"][:2]
        assert second["x"] - first["x"] == first["width"] + 4

    def test_timeline_dates_serialised(
        self,
        write_toml: WriteToml,
        manifest_data: dict[str, Any],
        capsys: CaptureFixture[str],
    ) -> None:
        manifest_data["tier"] = "platinum"
        path = write_toml(manifest_data, "platinum.toml")
        wg_cli.main(["layout", path.as_posix(), "--layout", "timeline"])
        sections = json.loads(capsys.readouterr().out)["layout"]["sections"]
        assert sections[0]["id"] == "category-family"
        assert sections[0]["date"] == "2024-04-01"
        assert sections[1]["date"] is None

    def test_timeline_expand_flag(
        self,
        write_toml: WriteToml,
        manifest_data: dict[str, Any],
        capsys: CaptureFixture[str],
    ) -> None:
        manifest_data["tier"] = "platinum"
        for image in manifest_data["images"]:
            image["category"] = "family"
        path = write_toml(manifest_data, "one-section.toml")

        wg_cli.main(["layout", str(path), "--layout", "timeline"])
        collapsed = json.loads(capsys.readouterr().out)["layout"]
        assert len(collapsed["items"]) == 4
        assert collapsed["sections"][0]["hidden_ids"] == [
            "m4", "m5", "m6", "m7",
        ]

        wg_cli.main([
            "layout", str(path), "--layout", "timeline",
            "--expand", "category-family",
        ])
        expanded = json.loads(capsys.readouterr().out)["layout"]
        assert len(expanded["items"]) == 8
        assert expanded["overflow"] == []

    def test_locked_layout_exits_with_status(
        self,
        manifest_path: Path,
        caplog: LogCaptureFixture,
        capsys: CaptureFixture[str],
    ) -> None:
        with caplog.at_level("WARNING"), pytest.raises(SystemExit) as exc:
            wg_cli.main(["layout", str(manifest_path), "--layout", "collage"])
        assert exc.value.code == wg_cli.EXIT_LOCKED
        assert "Upgrade to Platinum" in caplog.text
        assert capsys.readouterr().out == ""

    def test_tier_override(
        self,
        manifest_path: Path,
        capsys: CaptureFixture[str],
    ) -> None:
        wg_cli.main([
            "layout", str(manifest_path),
            "--tier", "platinum", "--layout", "collage",
            "--template", "circle",
        ])
        data = json.loads(capsys.readouterr().out)
        assert data["tier"] == "platinum"
        assert data["layout"]["kind"] == "collage"
        assert len(data["layout"]["items"]) == 8  # noqa: PLR2004

    def test_missing_manifest(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Manifest file not found"):
            wg_cli.main(["layout", str(tmp_path / "absent.toml")])


class TestLogParameters:
    """Tests parameter logging output for the layout command."""

    def test_log_parameters_logs_config(
        self,
        caplog: LogCaptureFixture,
    ) -> None:
        args = argparse.Namespace(manifest="m.toml", config="abc.toml")
        cfg = wg_cli.wg_config.GalleryConfig.model_validate(
            {"random": {"seed": 7}},
        )
        caplog.set_level("INFO")
        wg_cli.log_parameters(cfg, args)
        assert "Loaded config from: abc.toml" in caplog.text
        assert "Manifest: m.toml" in caplog.text
        assert "Random Seed: 7" in caplog.text

    def test_log_parameters_without_config(
        self,
        caplog: LogCaptureFixture,
    ) -> None:
        args = argparse.Namespace(manifest="m.toml", config=None)
        caplog.set_level("INFO")
        wg_cli.log_parameters(
            wg_cli.wg_config.GalleryConfig.model_validate({}), args,
        )
        assert "Loaded config from" not in caplog.text


class TestCLIMainFlow:
    """Container for top-level CLI flow entry point tests."""

    def test_main_invokes_run(self, monkeypatch: MonkeyPatch) -> None:
        called: dict[str, str] = {}

        def fake_run(args: argparse.Namespace) -> int:
            called["command"] = args.command
            return wg_cli.EXIT_OK

        monkeypatch.setattr(wg_cli, "run_from_args", fake_run)
        wg_cli.main(["tiers"])
        assert called == {"command": "tiers"}


@pytest.mark.integration
def test_script_main_entry() -> None:
    """Integration test: execute the module via subprocess."""
    env = os.environ.copy()
    env["PYTHONPATH"] = str(Path(__file__).parent.parent / "src")

    result = subprocess.run(  # noqa: S603
        [sys.executable, "-m", "wedding_gallery.cli", "tiers"],
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent.resolve(),
        env=env,
        timeout=60,
        check=False,
    )

    assert result.returncode == 0, (
        f"Script failed with return code {result.returncode}\n"
        f"--- STDOUT ---\n{result.stdout}\n"
        f"--- STDERR ---\n{result.stderr}\n"
    )
    assert json.loads(result.stdout)["tiers"][3]["tier"] == "platinum"
