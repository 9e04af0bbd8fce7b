"""Tests for the cl-thumbnail command line entry point."""

from pathlib import Path

import pytest
from loguru import logger
from PIL import Image

from cl_thumbnailer.cli import EXIT_FAILED, EXIT_OK, build_parser, configure_logging, main
from cl_thumbnailer.common.codec_registry import CapabilityReport
from cl_thumbnailer.plugins.png_thumbnail.task import ThumbnailConverter


@pytest.fixture(autouse=True)
def reset_logger():
    """main() replaces the loguru sinks; drop them so later tests start clean."""
    yield
    logger.remove()


def test_parser_defaults():
    args = build_parser().parse_args(["in.jpg", "out.png"])

    assert args.width == 120
    assert args.height == 120
    assert args.stretch is False
    assert args.strict_output is False


def test_main_converts(png_sample: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    output = tmp_path / "cli" / "thumb.png"

    code = main([str(png_sample), str(output), "--width", "64", "--height", "32"])

    assert code == EXIT_OK
    assert capsys.readouterr().out.strip() == str(output)
    with Image.open(output) as img:
        assert img.size == (64, 32)


def test_main_stretch(wide_image: Path, tmp_path: Path):
    output = tmp_path / "stretched.png"

    assert main([str(wide_image), str(output), "--stretch"]) == EXIT_OK
    with Image.open(output) as img:
        assert img.getchannel("A").getextrema() == (255, 255)


def test_main_missing_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    missing = tmp_path / "missing.jpg"

    code = main([str(missing), str(tmp_path / "out.png")])

    assert code == EXIT_FAILED
    assert str(missing) in capsys.readouterr().err


def test_main_invalid_size(png_sample: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    code = main([str(png_sample), str(tmp_path / "out.png"), "--width", "0"])

    assert code == EXIT_FAILED
    assert "Invalid conversion arguments" in capsys.readouterr().err


def test_main_strict_output(
    png_sample: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
):
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    code = main([str(png_sample), "../escaped.png", "--strict-output"])

    assert code == EXIT_FAILED
    assert "outside the working directory" in capsys.readouterr().err
    assert not (tmp_path / "escaped.png").exists()


def test_main_list_formats(capsys: pytest.CaptureFixture[str]):
    assert main(["--list-formats"]) == EXIT_OK

    out = capsys.readouterr().out
    assert out.startswith("Supported image formats:")
    assert "- png" in out
    assert "- jpeg" in out


def test_main_requires_paths():
    with pytest.raises(SystemExit) as exc_info:
        _ = main([])

    assert exc_info.value.code == 2


@pytest.mark.parametrize(("verbosity", "level"), [(0, "WARNING"), (1, "INFO"), (2, "DEBUG"), (5, "DEBUG")])
def test_configure_logging_levels(verbosity: int, level: str, capsys: pytest.CaptureFixture[str]):
    configure_logging(verbosity)

    logger.log(level, "visible")
    if level != "DEBUG":
        logger.debug("hidden")

    err = capsys.readouterr().err
    assert "visible" in err
    assert "hidden" not in err


def test_main_list_formats_reports_missing(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    report = CapabilityReport(available=["png"], missing=["webp", "jfif"])
    monkeypatch.setattr(ThumbnailConverter, "report_capabilities", lambda self: report)

    assert main(["--list-formats"]) == EXIT_OK

    out = capsys.readouterr().out
    assert "- png" in out
    assert "Possibly unsupported: webp, jfif" in out


def test_main_list_formats_complete_has_no_warning(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    report = CapabilityReport(available=["png"])
    monkeypatch.setattr(ThumbnailConverter, "report_capabilities", lambda self: report)

    assert main(["--list-formats"]) == EXIT_OK
    assert "Possibly unsupported" not in capsys.readouterr().out
