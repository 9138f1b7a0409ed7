# tests/test_cli.py
"""
Tests for the CLI parser and execution logic.

These tests verify CLI parsing, config fallback behavior, exit codes,
and the main entry point.

Modules tested:
- build_arg_parser()
- log_parameters()
- run_from_args()
- main()
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from PIL import Image

import live_collage.cli as lc_cli
from live_collage.config_defaults import DEFAULT_STRATEGY
from live_collage.errors import ExportFailure
from live_collage.session import CollageSession

if TYPE_CHECKING:
    from collections.abc import Callable

    from _pytest.capture import CaptureFixture
    from _pytest.logging import LogCaptureFixture
    from _pytest.monkeypatch import MonkeyPatch


class TestCLIArgumentParsing:
    """Unit tests for CLI flag parsing."""

    def test_flag_parsing(self) -> None:
        """Test that layout and output flags are parsed correctly."""
        parser = lc_cli.build_arg_parser()
        args = parser.parse_args([
            "--photos", "a.jpg", "b.jpg",
            "--strategy", "uniform",
            "--viewport", "tablet",
            "--match-orientation",
            "--scale", "3",
            "--print-plan",
        ])

        assert args.photos == [Path("a.jpg"), Path("b.jpg")]
        assert args.strategy == "uniform"
        assert args.viewport == "tablet"
        assert args.match_orientation is True
        assert args.scale == 3  # noqa: PLR2004
        assert args.print_plan is True

    def test_unset_options_are_suppressed(self) -> None:
        """Options left out should not appear so config values win."""
        args = lc_cli.build_arg_parser().parse_args(["--photos", "a.jpg"])
        for name in ("strategy", "viewport", "cell_px", "output", "scale"):
            assert not hasattr(args, name)
        assert args.viewport_width is None
        assert args.config is None

    def test_unknown_strategy_rejected(self) -> None:
        """Choices are limited to registered strategies."""
        with pytest.raises(SystemExit):
            lc_cli.build_arg_parser().parse_args([
                "--photos", "a.jpg", "--strategy", "spiral",
            ])

    def test_required_photos_missing(self) -> None:
        """Test that a run without photos triggers SystemExit."""
        with pytest.raises(SystemExit):
            lc_cli.main([])

    def test_validate_only_requires_config(self) -> None:
        """--validate-config-only without --config is a usage error."""
        with pytest.raises(SystemExit):
            lc_cli.main(["--validate-config-only"])

    def test_negative_viewport_width(self) -> None:
        """Negative widths are rejected before any work is done."""
        with pytest.raises(SystemExit):
            lc_cli.main(["--photos", "a.jpg", "--viewport-width", "-1"])

    def test_version_flag(self, capsys: CaptureFixture[str]) -> None:
        """--version prints the program name and exits."""
        with pytest.raises(SystemExit) as exc_info:
            lc_cli.main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("live-collage ")


class TestCLIRun:
    """End-to-end runs of run_from_args through main()."""

    def test_exports_collage(
        self,
        photo_files: list[Path],
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        """A normal run writes one PNG into the output directory."""
        out_dir = tmp_path / "collages"
        caplog.set_level("INFO")

        code = lc_cli.main([
            "--photos", *map(str, photo_files),
            "--output", str(out_dir),
            "--app-name", "Test Booth",
            "--scale", "1",
        ])

        assert code == 0
        written = list(out_dir.glob("test-booth-collage-*.png"))
        assert len(written) == 1
        assert "Collage saved to" in caplog.text

    def test_print_plan(
        self,
        photo_files: list[Path],
        capsys: CaptureFixture[str],
    ) -> None:
        """--print-plan writes the plan as JSON and skips export."""
        code = lc_cli.main([
            "--photos", *map(str, photo_files),
            "--strategy", "fixed",
            "--print-plan",
        ])

        assert code == 0
        plan = json.loads(capsys.readouterr().out)
        assert plan["strategy"] == "fixed"
        assert (plan["rows"], plan["cols"]) == (2, 2)
        assert len(plan["assignments"]) == 3  # noqa: PLR2004
        second = plan["assignments"][1]
        assert (second["grid_row"], second["grid_column"]) == (
            "1 / 2", "2 / 3",
        )

    def test_viewport_width_selects_class(
        self,
        photo_files: list[Path],
        capsys: CaptureFixture[str],
    ) -> None:
        """A narrow viewport width switches to the mobile grid."""
        code = lc_cli.main([
            "--photos", *map(str, photo_files),
            "--viewport-width", "390",
            "--print-plan",
        ])

        assert code == 0
        plan = json.loads(capsys.readouterr().out)
        assert plan["viewport"] == "mobile"
        assert plan["strategy"] == DEFAULT_STRATEGY

    def test_unreadable_photos_are_skipped(
        self,
        photo_files: list[Path],
        broken_file: Path,
        capsys: CaptureFixture[str],
        caplog: LogCaptureFixture,
    ) -> None:
        """One broken file does not stop the rest of the collage."""
        code = lc_cli.main([
            "--photos", str(broken_file), str(photo_files[0]),
            "--print-plan",
        ])

        assert code == 0
        plan = json.loads(capsys.readouterr().out)
        assert len(plan["assignments"]) == 1
        assert "1 of 2 photos could not be read" in caplog.text

    def test_no_readable_photos(
        self,
        broken_file: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        """A run with nothing decodable fails with exit code 1."""
        assert lc_cli.main(["--photos", str(broken_file)]) == 1
        assert "No readable photos" in caplog.text

    def test_uniform_over_capacity(
        self,
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        """Too many photos for the uniform grid fails with exit code 1."""
        path = tmp_path / "tiny.png"
        Image.new("RGB", (4, 4), "white").save(path)

        code = lc_cli.main([
            "--photos", *([str(path)] * 37),
            "--strategy", "uniform",
            "--print-plan",
        ])

        assert code == 1
        assert "Too many photos for the uniform strategy" in caplog.text

    def test_export_failure(
        self,
        monkeypatch: MonkeyPatch,
        photo_files: list[Path],
        caplog: LogCaptureFixture,
    ) -> None:
        """Export errors are reported and mapped to exit code 1."""
        def fail_export(*_: object, **__: object) -> Path:
            msg = "disk full"
            raise ExportFailure(msg)

        monkeypatch.setattr(CollageSession, "export", fail_export)

        assert lc_cli.main(["--photos", str(photo_files[0])]) == 1
        assert "Error generating collage: disk full" in caplog.text

    def test_config_only_mode(
        self,
        monkeypatch: MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        """Test --validate-config-only short circuits the run."""
        config_path = tmp_path / "config.toml"
        config_path.write_text("[export]\noutput = 'abc'\n", encoding="utf-8")
        monkeypatch.setattr(
            lc_cli, "CollageSession",
            lambda *_: pytest.fail("session should not be built"),
        )

        assert lc_cli.main([
            "--config", str(config_path), "--validate-config-only",
        ]) == 0

    def test_missing_config_is_usage_error(self, photo_files: list[Path],
                                           ) -> None:
        """A missing config file is reported through the parser."""
        with pytest.raises(SystemExit):
            lc_cli.main([
                "--photos", str(photo_files[0]),
                "--config", "does-not-exist.toml",
            ])

    def test_args_override_config(
        self,
        photo_files: list[Path],
        tmp_path: Path,
        capsys: CaptureFixture[str],
    ) -> None:
        """CLI arguments win over config file values."""
        config_path = tmp_path / "config.toml"
        config_path.write_text(
            "[layout]\nstrategy = 'uniform'\nviewport = 'laptop'\n",
            encoding="utf-8",
        )

        lc_cli.main([
            "--photos", *map(str, photo_files),
            "--config", str(config_path),
            "--strategy", "mosaic",
            "--print-plan",
        ])

        plan = json.loads(capsys.readouterr().out)
        assert plan["strategy"] == "mosaic"
        assert plan["viewport"] == "laptop"


class TestLogParameters:
    """Tests parameter logging output for CLI execution."""

    def test_log_parameters_logs_config(
        self,
        caplog: LogCaptureFixture,
        make_session: Callable[..., CollageSession],
    ) -> None:
        """Test config path and layout settings are logged."""
        session = make_session(layout={"strategy": "fixed"})
        args = lc_cli.build_arg_parser().parse_args([
            "--photos", "a.jpg", "b.jpg", "--config", "abc.toml",
        ])

        caplog.set_level("INFO")
        lc_cli.log_parameters(session, args)

        assert "Loaded config from: abc.toml" in caplog.text
        assert "Photos requested: 2" in caplog.text
        assert "Strategy: fixed" in caplog.text
        assert "Match Orientation: Disabled" in caplog.text

    def test_log_parameters_without_config(
        self,
        caplog: LogCaptureFixture,
        make_session: Callable[..., CollageSession],
    ) -> None:
        """No config line is logged when --config is absent."""
        args = lc_cli.build_arg_parser().parse_args(["--photos", "a.jpg"])
        caplog.set_level("INFO")
        lc_cli.log_parameters(make_session(), args)
        assert "Loaded config from" not in caplog.text
        assert "Viewport: desktop" in caplog.text


@pytest.mark.integration
def test_script_main_entry(tmp_path: Path) -> None:
    """Integration test: execute the CLI module via subprocess."""
    photo = tmp_path / "photo.jpg"
    Image.new("RGB", (64, 48), color="blue").save(photo)
    out_dir = tmp_path / "out"

    env = os.environ.copy()
    env["PYTHONPATH"] = str(Path(__file__).parent.parent / "src")

    result = subprocess.run(  # noqa: S603
        [
            sys.executable,
            "-m",
            "live_collage.cli",
            "--photos",
            str(photo),
            "--output",
            str(out_dir),
        ],
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent.resolve(),
        env=env,
        timeout=120,
        check=False,
    )

    assert result.returncode == 0, (
        f"Script failed with return code {result.returncode}\n"
        f"--- STDOUT ---\n{result.stdout}\n"
        f"--- STDERR ---\n{result.stderr}\n"
    )
    assert len(list(out_dir.glob("*.png"))) == 1
