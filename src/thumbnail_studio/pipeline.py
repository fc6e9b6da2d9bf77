"""Pipeline helpers for encoding headshots, generating thumbnails and saving them."""

from __future__ import annotations

import asyncio
import base64
import logging
import re
import shlex
from pathlib import Path
from typing import Iterable, List, Sequence

from reference_images import DecodeError
from thumbnail_generation import (
    ASPECT_RATIOS,
    STYLES,
    VARIATION_COUNTS,
    Failure,
    GenerationOrchestrator,
    GenerationOutcome,
    GenerationParameters,
    Loading,
    SessionState,
    Success,
    ValidationError,
)

log = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("artifacts/thumbnails")


def suggested_filename(title: str, index: int, total: int) -> str:
    """Download name for image ``index`` of ``total`` derived from the video title."""

    base_name = re.sub(r"[^a-z0-9]", "_", title.strip(), flags=re.IGNORECASE).lower() or "thumbnail"
    if total > 1:
        return f"{base_name}_{index + 1}.png"
    return f"{base_name}.png"


def save_thumbnails(images: Sequence[str], title: str, output_dir: Path | str | None = None) -> List[Path]:
    """Decode base64 PNG payloads and write them under their suggested filenames."""

    out_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    paths: List[Path] = []
    for idx, image in enumerate(images):
        out_path = out_dir / suggested_filename(title, idx, len(images))
        out_path.write_bytes(base64.b64decode(image))
        paths.append(out_path)
    log.info("Saved %d thumbnail(s) to %s", len(paths), out_dir)
    return paths


def describe(session: SessionState) -> str:
    """One-line status of the session, as the result panel would show it."""

    outcome = session.outcome
    if isinstance(outcome, Loading):
        return "Generating..."
    if isinstance(outcome, Failure):
        return f"Error: {outcome.message}"
    if isinstance(outcome, Success):
        return f"{len(outcome.images)} thumbnail(s) ready"
    return "Your thumbnails will appear here"


def generate_thumbnails(
    orchestrator: GenerationOrchestrator,
    image_paths: Iterable[Path],
    *,
    title: str,
    aspect_ratio: str,
    style: str,
    count: int,
    output_dir: Path | None = None,
) -> List[Path]:
    """Encode headshots, run one generation and save the results.

    Raises ``DecodeError``/``ValidationError`` for bad input and ``RuntimeError``
    with the aggregate message when the model fails.
    """

    session = orchestrator.session
    session.add_references(image_paths)
    params = GenerationParameters(title=title, aspect_ratio=aspect_ratio, style=style, variation_count=count)
    outcome = asyncio.run(orchestrator.generate(params))
    if isinstance(outcome, Failure):
        raise RuntimeError(outcome.message)
    return save_thumbnails(outcome.images, title, output_dir)


_HELP = """Commands:
  add <path> [<path> ...]   upload headshot image(s)
  remove <n>                remove headshot number n
  clear                     remove all headshots
  list                      show headshots and settings
  title <text>              set the video title
  ratio <value>             aspect ratio: {ratios}
  style <value>             style: {styles}
  count <n>                 number of thumbnails: {counts}
  generate                  generate thumbnail(s)
  save [<dir>]              save the last thumbnails
  quit                      exit
"""


def _help_text() -> str:
    return _HELP.format(
        ratios=", ".join(ASPECT_RATIOS),
        styles=", ".join(STYLES),
        counts=", ".join(str(c) for c in VARIATION_COUNTS),
    )


def run_interactive(orchestrator: GenerationOrchestrator, output_dir: Path | None = None) -> None:
    """Interactive session: manage headshots and settings, then generate."""

    print("\n=== AI YouTube Thumbnail Generator ===")
    print("Create click-worthy thumbnails in seconds. Just provide a title and your headshot.\n")
    print(_help_text())

    # One loop for the whole session; the SDK's async HTTP client is bound to it
    loop = asyncio.new_event_loop()
    try:
        _session_loop(orchestrator, loop, output_dir)
    finally:
        loop.close()


def _session_loop(
    orchestrator: GenerationOrchestrator,
    loop: asyncio.AbstractEventLoop,
    output_dir: Path | None,
) -> None:
    session = orchestrator.session
    title = ""
    aspect_ratio = "16:9"
    style = "Vibrant"
    count = 1
    last_title = ""
    last_outcome: GenerationOutcome | None = None

    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            print()
            return
        if not line:
            continue
        command, _, arg = line.partition(" ")
        arg = arg.strip()

        if command in ("quit", "exit"):
            return
        if command == "help":
            print(_help_text())
        elif command == "add":
            whole = Path(arg).expanduser()
            if arg and whole.is_file():
                paths = [whole]
            else:
                try:
                    paths = [Path(p).expanduser() for p in shlex.split(arg)]
                except ValueError:
                    paths = []
            if not paths:
                print("Usage: add <path> [<path> ...]")
                continue
            try:
                added = session.add_references(paths)
            except DecodeError as exc:
                log.error("Error reading files: %s", exc)
                print(DecodeError.user_message)
                continue
            print(f"Added {len(added)} headshot(s); {len(session.references)} total.")
        elif command == "remove":
            try:
                session.remove_reference(int(arg) - 1)
            except (ValueError, IndexError):
                print(f"No headshot number {arg!r}.")
                continue
            print(f"{len(session.references)} headshot(s) left.")
        elif command == "clear":
            session.clear_references()
            print("Cleared all headshots.")
        elif command == "list":
            for i, ref in enumerate(session.references, start=1):
                print(f"  {i}. {ref.media_type} ({len(ref.data)} bytes)")
            print(f"  title={title!r} ratio={aspect_ratio} style={style} count={count}")
            print(f"  {describe(session)}")
        elif command == "title":
            title = arg
        elif command == "ratio":
            aspect_ratio = arg
        elif command == "style":
            style = arg.capitalize()
        elif command == "count":
            try:
                count = int(arg)
            except ValueError:
                print("Count must be a number.")
        elif command == "generate":
            params = GenerationParameters(title=title, aspect_ratio=aspect_ratio, style=style, variation_count=count)
            try:
                last_outcome = loop.run_until_complete(orchestrator.generate(params))
            except ValidationError as exc:
                print(exc)
                continue
            last_title = title
            print(describe(session))
        elif command == "save":
            if not isinstance(last_outcome, Success):
                print("Nothing to save yet.")
                continue
            for path in save_thumbnails(last_outcome.images, last_title, Path(arg) if arg else output_dir):
                print(path)
        else:
            print(f"Unknown command {command!r}. Type 'help' for a list.")
