"""Main module for the batch resizer CLI."""

import sys
import time
import logging
import argparse

from . import __version__
from .core.exceptions import ConfigurationError
from .core.logging_config import get_logger
from .core.models import Completed, OutputFormat
from .core.presets import PRESETS, default_preset
from .session import ResizeSession


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``batch-resizer`` command."""
    parser = argparse.ArgumentParser(
        prog="batch-resizer",
        description="Batch Resizer - resize images to presets or custom sizes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resize with a catalog preset
  batch-resizer resize photos/*.jpg --output-dir out --preset "HD 720p"

  # Custom size, stretched, converted to WebP
  batch-resizer resize photos --output-dir out --width 640 --height 480 \\
                       --no-aspect --format webp --create-output-dir

  # List presets
  batch-resizer presets
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    resize_parser = subparsers.add_parser(
        "resize", help="Resize image files or the images in directories"
    )
    resize_parser.add_argument("files", nargs="+", help="Image files or directories")
    resize_parser.add_argument(
        "--output-dir", required=True, help="Directory resized images are written to"
    )
    resize_parser.add_argument(
        "--create-output-dir",
        action="store_true",
        help="Create the output directory if it does not exist",
    )
    resize_parser.add_argument(
        "--preset",
        default=default_preset().name,
        help=f"Catalog preset name (default: {default_preset().name})",
    )
    resize_parser.add_argument("--width", type=int, help="Custom target width")
    resize_parser.add_argument("--height", type=int, help="Custom target height")
    resize_parser.add_argument(
        "--no-aspect",
        action="store_true",
        help="Stretch to the exact size instead of keeping the aspect ratio",
    )
    resize_parser.add_argument(
        "--format",
        default=None,
        choices=[f.value for f in OutputFormat],
        help="Output format (default: the preset's format)",
    )
    resize_parser.add_argument(
        "--poll-interval",
        type=float,
        default=0.1,
        help="Seconds between status checks (default: 0.1)",
    )
    resize_parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers.add_parser("presets", help="List the built-in presets")
    subparsers.add_parser("version", help="Show version information")

    return parser


def configure_session(args: argparse.Namespace) -> ResizeSession:
    """
    Build a session from parsed ``resize`` arguments.

    Raises:
        ConfigurationError: For unknown presets or an incomplete custom size
    """
    session = ResizeSession(debug=args.debug)
    session.select_files(args.files)
    session.set_output_directory(args.output_dir, create=args.create_output_dir)

    if args.width is not None or args.height is not None:
        if args.width is None or args.height is None:
            raise ConfigurationError("--width and --height must be given together")
        session.use_custom(
            str(args.width),
            str(args.height),
            maintain_aspect_ratio=not args.no_aspect,
            output_format=OutputFormat(args.format or OutputFormat.KEEP_ORIGINAL.value),
        )
        return session

    session.use_preset(args.preset)
    overrides = {}
    if args.no_aspect:
        overrides["maintain_aspect_ratio"] = False
    if args.format:
        overrides["output_format"] = OutputFormat(args.format)
    if overrides:
        session.selected_preset = session.selected_preset.model_copy(update=overrides)
    return session


def run_resize(args: argparse.Namespace) -> int:
    """Run a batch to completion, polling its status. Returns the exit code."""
    logger = get_logger("batch-resizer")
    if args.debug:
        logger.setLevel(logging.DEBUG)

    try:
        session = configure_session(args)
    except ConfigurationError as e:
        logger.error(f"Invalid arguments: {e}")
        return 2

    if not session.start_processing():
        return 1

    while session.is_processing:
        session.update_processing_status()
        if session.is_processing:
            time.sleep(args.poll_interval)

    for result in session.last_results:
        if not result.success:
            print(f"FAILED {result.source_path}: [{result.error.kind}] {result.error}")

    print(session.status_text)

    status = session.status
    if isinstance(status, Completed) and status.failed == 0:
        return 0
    return 1


def main() -> None:
    """
    Entry point for the ``batch-resizer`` command line interface.
    """
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "resize":
        try:
            sys.exit(run_resize(args))
        except KeyboardInterrupt:
            get_logger("batch-resizer").warning("Interrupted by user.")
            sys.exit(130)

    elif args.command == "presets":
        for preset in PRESETS:
            aspect = "maintained" if preset.maintain_aspect_ratio else "ignored"
            print(
                f"{preset.label}  aspect ratio: {aspect}  "
                f"format: {preset.output_format.value}"
            )
        sys.exit(0)

    elif args.command == "version":
        print("Batch Resizer CLI")
        print(f"Version {__version__}")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
