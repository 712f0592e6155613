"""Command-line entry point for fabula."""

import argparse
import sys
import time

from fabula import __version__
from fabula.errors import AppError, ConfigError, ResourceError
from fabula.logging import log_event, setup_logging
from fabula.manifest import Manifest, load_manifest, resolve_saves_dir
from fabula.prompts import get_prompt
from fabula.repl import Runtime, repl, shutdown
from fabula.resources import load_resources
from fabula.saves import SaveManager
from fabula.session import Session
from fabula.ui.interaction import ConsoleInteraction


def new_session(manifest: Manifest) -> Session:
    """Create a fresh session positioned at the manifest entry point."""
    return Session(
        history=[manifest.entry_point()],
        lang=manifest.settings.default_lang,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fabula",
        description="fabula - play a text-driven narrative",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Continue from the default save slot
  fabula ~/stories/lighthouse

  # Start over in a named slot with debug commands enabled
  fabula ~/stories/lighthouse --slot test --new --debug
        """,
    )
    parser.add_argument("content_dir", help="Directory containing manifest.json")
    parser.add_argument("--slot", "-s", help="Save slot name (defaults to the manifest's)")
    parser.add_argument("--new", action="store_true", help="Ignore any existing save")
    parser.add_argument("--debug", action="store_true", help="Enable debug-only commands")
    parser.add_argument("--log-file", help="Write structured logs to this file")
    parser.add_argument("--version", action="version", version=f"fabula {__version__}")
    return parser


def load_runtime(args: argparse.Namespace) -> Runtime:
    """Load manifest, resources, and the session to play."""
    manifest = load_manifest(args.content_dir, debug=True if args.debug else None)
    resources = load_resources(args.content_dir)
    entry = manifest.entry_point()
    try:
        get_prompt(resources.prompts, entry.prompt, entry.file)
    except ResourceError as e:
        raise ConfigError(f"Invalid manifest entry '{manifest.entry}': {e}") from e

    saves = SaveManager(
        resolve_saves_dir(manifest, args.content_dir),
        args.slot or manifest.settings.save_slot,
    )

    session = None if args.new else saves.read()
    if session is None:
        session = new_session(manifest)

    return Runtime(
        manifest=manifest,
        session=session,
        saves=saves,
        resources=resources,
        interaction=ConsoleInteraction(),
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point for fabula CLI."""
    args = build_parser().parse_args(argv)

    try:
        runtime = load_runtime(args)
    except AppError as e:
        print(f"Error: {e}")
        sys.exit(1)

    setup_logging(args.log_file)
    log_event(
        "app_start",
        content_id=runtime.manifest.id,
        content_dir=args.content_dir,
        slot=runtime.saves.default_slot,
        debug=runtime.manifest.debug,
        log_file=args.log_file,
    )

    print(f"{runtime.manifest.title} (v{runtime.manifest.version})")
    started = time.perf_counter()
    try:
        silent = repl(runtime)
        shutdown(runtime, silent)
    except Exception as e:
        log_event(
            "app_stop",
            reason="error",
            uptime_ms=round((time.perf_counter() - started) * 1000),
            error_type=type(e).__name__,
            error=str(e),
        )
        raise

    log_event(
        "app_stop",
        reason="silent_shutdown" if silent else "shutdown",
        uptime_ms=round((time.perf_counter() - started) * 1000),
    )
