"""CLI entry point for the thumbnail studio."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from reference_images import DecodeError
from thumbnail_generation import (
    ASPECT_RATIOS,
    DEFAULT_MODEL,
    STYLES,
    VARIATION_COUNTS,
    GeminiThumbnailClient,
    GenerationOrchestrator,
    ValidationError,
)
from thumbnail_generation.gemini_client import load_env_key

from . import __version__, log_setup
from .pipeline import DEFAULT_OUTPUT_DIR, generate_thumbnails, run_interactive

log = logging.getLogger(__name__)


def _add_client_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--model", default=None, help=f"Model override (default: {DEFAULT_MODEL})")
    parser.add_argument(
        "--api-key", default=None, help="API key override (else GEMINI_API_KEY/GOOGLE_API_KEY)"
    )
    parser.add_argument(
        "--outdir", type=Path, default=DEFAULT_OUTPUT_DIR, help="Directory for downloaded thumbnails"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI YouTube thumbnail generator")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument("--log-level", default=None, help="Console log level (default: WARNING)")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write a rotating debug log here")

    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate thumbnail(s) from a title and headshots")
    gen.add_argument("--title", required=True, help="Video title to render on the thumbnail")
    gen.add_argument("--images", nargs="+", required=True, type=Path, help="Headshot image paths")
    gen.add_argument(
        "--aspect-ratio", default="16:9", choices=list(ASPECT_RATIOS), help="Thumbnail aspect ratio"
    )
    gen.add_argument("--style", default="Vibrant", choices=list(STYLES), help="Thumbnail style")
    gen.add_argument(
        "--count", type=int, default=1, choices=list(VARIATION_COUNTS), help="Number of thumbnails"
    )
    _add_client_args(gen)

    sub.add_parser("options", help="List the supported aspect ratios, styles and counts")

    interactive = sub.add_parser("interactive", help="Build a session step by step")
    _add_client_args(interactive)

    return parser


def _print_options() -> None:
    print("Aspect ratios:")
    for value, label in ASPECT_RATIOS.items():
        print(f"  {value}  ({label})")
    print("Styles:")
    for style in STYLES:
        print(f"  {style}")
    print("Number of thumbnails: " + ", ".join(str(c) for c in VARIATION_COUNTS))


def main(argv: list[str] | None = None) -> int:
    # Load .env if present (ignored if values already in env)
    load_env_key()

    parser = build_parser()
    args = parser.parse_args(argv)
    log_setup.configure(args.log_level, args.log_file)

    if args.version:
        print(__version__)
        return 0

    if args.command == "options":
        _print_options()
        return 0

    if args.command in ("generate", "interactive"):
        try:
            client = GeminiThumbnailClient(model=args.model, api_key=args.api_key)
        except RuntimeError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 2
        orchestrator = GenerationOrchestrator(client)

        if args.command == "interactive":
            run_interactive(orchestrator, output_dir=args.outdir)
            return 0

        try:
            outputs = generate_thumbnails(
                orchestrator,
                args.images,
                title=args.title,
                aspect_ratio=args.aspect_ratio,
                style=args.style,
                count=args.count,
                output_dir=args.outdir,
            )
        except DecodeError as exc:
            log.error("Error reading files: %s", exc)
            print(f"Error: {DecodeError.user_message}", file=sys.stderr)
            return 1
        except (ValidationError, RuntimeError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        for path in outputs:
            print(path)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
