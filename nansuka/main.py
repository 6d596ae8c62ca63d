"""
Nansuka - command-line entry point.

Usage:
    nansuka serve --port 8787
    nansuka translate notes.txt
    nansuka translate notes.txt --context "a letter to a friend"
    nansuka summarize notes.txt
    nansuka actions "Thank you for the wonderful evening."
    nansuka clear-cache
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from nansuka.config import Settings, get_settings
from nansuka.core.actions import AI_ACTIONS, build_action_url
from nansuka.services.session import TranslationSession


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


# =============================================================================
# Commands
# =============================================================================


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the edge proxy."""
    import uvicorn

    uvicorn.run(
        "nansuka.api.app:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


async def _translate(text: str, settings: Settings, context: str | None) -> int:
    session = TranslationSession.from_settings(settings)
    try:
        if context is not None:
            session.set_context(context)
        elif text.strip():
            await session.summarizer.summarize(text)

        await session.orchestrator.refresh(text)

        if session.context:
            print(f"Context: {session.context}")
            print()
        for paragraph in session.paragraphs:
            print(paragraph.text)
            print(f"  → {paragraph.translated_text}")
            print()

        if session.error:
            print(f"Error: {session.error}", file=sys.stderr)
            return 1
        return 0
    finally:
        await session.close()


def cmd_translate(args: argparse.Namespace, settings: Settings) -> int:
    """Translate a file paragraph by paragraph through the proxy."""
    return asyncio.run(_translate(_read_text(args.source), settings, args.context))


async def _summarize(text: str, settings: Settings) -> int:
    session = TranslationSession.from_settings(settings)
    try:
        summary = await session.summarizer.summarize(text)
        if summary is None:
            print(f"Error: {session.error}", file=sys.stderr)
            return 1
        print(summary)
        return 0
    finally:
        await session.close()


def cmd_summarize(args: argparse.Namespace, settings: Settings) -> int:
    """Print the context summary for a file."""
    return asyncio.run(_summarize(_read_text(args.source), settings))


def cmd_actions(args: argparse.Namespace, settings: Settings) -> int:
    """Print hand-off URLs for a translated text."""
    for action in AI_ACTIONS:
        print(f"{action.label}: {build_action_url(action, args.text, args.selection or '')}")
    return 0


async def _clear_cache(settings: Settings) -> None:
    session = TranslationSession.from_settings(settings)
    try:
        await session.translation_cache.clear()
        session.storage.contexts.clear()
    finally:
        await session.close()


def cmd_clear_cache(args: argparse.Namespace, settings: Settings) -> int:
    """Drop cached translations and context summaries."""
    asyncio.run(_clear_cache(settings))
    print(f"Cleared caches under {settings.data_dir}")
    return 0


# =============================================================================
# Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="nansuka",
        description="Nansuka - bilingual paragraph translation assistant",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the edge proxy")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", "-p", type=int, help="Port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(func=cmd_serve)

    translate_parser = subparsers.add_parser("translate", help="Translate a text file")
    translate_parser.add_argument("source", help="File to translate ('-' for stdin)")
    translate_parser.add_argument(
        "--context", "-c", default=None, help="Use this context instead of a generated one"
    )
    translate_parser.set_defaults(func=cmd_translate)

    summarize_parser = subparsers.add_parser("summarize", help="Summarize a text file")
    summarize_parser.add_argument("source", help="File to summarize ('-' for stdin)")
    summarize_parser.set_defaults(func=cmd_summarize)

    actions_parser = subparsers.add_parser("actions", help="Show AI hand-off URLs")
    actions_parser.add_argument("text", help="Translated text")
    actions_parser.add_argument("--selection", "-s", help="Selected part of the text")
    actions_parser.set_defaults(func=cmd_actions)

    clear_parser = subparsers.add_parser("clear-cache", help="Clear local caches")
    clear_parser.set_defaults(func=cmd_clear_cache)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 2

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
