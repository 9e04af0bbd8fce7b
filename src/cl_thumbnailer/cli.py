"""Command line entry point: ``cl-thumbnail INPUT OUTPUT``."""

import argparse
import sys
from collections.abc import Sequence

from loguru import logger

from .common.errors import ThumbnailError
from .common.schemas import DEFAULT_TARGET_SIZE, ConverterSettings, OutputPathPolicy
from .plugins.png_thumbnail.task import ThumbnailConverter

EXIT_OK = 0
EXIT_FAILED = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cl-thumbnail",
        description="Convert an image of any common format into a PNG thumbnail.",
    )
    _ = parser.add_argument("input", nargs="?", help="Image file; the extension may be wrong or missing")
    _ = parser.add_argument("output", nargs="?", help="PNG file to write")
    _ = parser.add_argument("--width", type=int, default=DEFAULT_TARGET_SIZE, help="Canvas width")
    _ = parser.add_argument("--height", type=int, default=DEFAULT_TARGET_SIZE, help="Canvas height")
    _ = parser.add_argument(
        "--stretch",
        action="store_true",
        help="Fill the canvas instead of preserving the aspect ratio",
    )
    _ = parser.add_argument(
        "--strict-output",
        action="store_true",
        help="Refuse output paths outside the working directory",
    )
    _ = parser.add_argument(
        "--list-formats",
        action="store_true",
        help="Print the decoders available to this process and exit",
    )
    _ = parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def configure_logging(verbosity: int) -> None:
    level = "WARNING"
    if verbosity == 1:
        level = "INFO"
    elif verbosity >= 2:
        level = "DEBUG"
    logger.remove()
    _ = logger.add(sys.stderr, level=level)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    settings = ConverterSettings(
        output_path_policy=OutputPathPolicy.REJECT if args.strict_output else OutputPathPolicy.WARN
    )
    converter = ThumbnailConverter(settings=settings)

    if args.list_formats:
        report = converter.report_capabilities()
        print("Supported image formats:")
        for name in report.available:
            print(f"- {name}")
        if not report.is_complete:
            print("Possibly unsupported: " + ", ".join(report.missing))
        return EXIT_OK

    if not args.input or not args.output:
        parser.error("INPUT and OUTPUT are required")

    try:
        output = converter.convert(
            args.input,
            args.output,
            target_width=args.width,
            target_height=args.height,
            preserve_ratio=not args.stretch,
        )
    except ThumbnailError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILED

    print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
