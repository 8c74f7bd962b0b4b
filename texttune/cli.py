from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

from texttune.client.backend import DEFAULT_BACKEND_URL, BackendClient
from texttune.client.form import FormController
from texttune.core.errors import UnsupportedToneError
from texttune.services.prompting import Mode, Tone


def _add_serve_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default=None, help="Bind address (defaults to HOST).")
    parser.add_argument("--port", type=int, default=None, help="Bind port (defaults to PORT).")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development).")


def _add_transform_args(parser: argparse.ArgumentParser, input_help: str) -> None:
    parser.add_argument("input", nargs="?", default=None, help=input_help)
    parser.add_argument("--input-file", default=None, help="Read the input from a file instead.")
    parser.add_argument("--max-words", default="", help="Approximate maximum word count.")
    parser.add_argument("--min-words", default="", help="Minimum word count.")
    parser.add_argument(
        "--tone",
        default=Tone.NEUTRAL.value,
        choices=[tone.value for tone in Tone],
        help="Tone of the output.",
    )
    parser.add_argument(
        "--backend-url",
        default=os.getenv("TEXTTUNE_BACKEND_URL", DEFAULT_BACKEND_URL),
        help="Base URL of the TextTune backend.",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")


def _load_input(text: str | None, input_file: str | None) -> str:
    if text and input_file:
        raise ValueError("Use either a positional input or --input-file, not both.")
    if input_file:
        return Path(input_file).read_text(encoding="utf-8")
    if text:
        return text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise ValueError("Provide the input as an argument, with --input-file, or on stdin.")


async def _transform_from_args(mode: Mode, args: argparse.Namespace) -> FormController:
    controller = FormController(BackendClient(args.backend_url), mode=mode)
    controller.set_input(_load_input(args.input, args.input_file))
    controller.set_word_limits(max_words=args.max_words, min_words=args.min_words)
    controller.select_tone(args.tone)
    if not controller.can_submit:
        raise ValueError("Input is empty.")
    await controller.submit()
    return controller


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texttune",
        description="Rewrite or generate text with a generative-language model.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP backend.")
    _add_serve_args(p_serve)

    p_rewrite = sub.add_parser("rewrite", help="Grammar-check and rewrite text.")
    _add_transform_args(p_rewrite, "Text to rewrite.")

    p_generate = sub.add_parser("generate", help="Generate a message from a request.")
    _add_transform_args(p_generate, "Description of the message to generate.")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn

        from texttune.core.config import get_settings

        settings = get_settings()
        uvicorn.run(
            "texttune.main:create_app",
            factory=True,
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=args.reload,
            log_config=None,
        )
        return 0

    mode = Mode[args.command.upper()]
    try:
        controller = asyncio.run(_transform_from_args(mode, args))
    except (ValueError, OSError, UnsupportedToneError) as exc:
        parser.error(str(exc))

    if controller.error:
        print(f"Error: {controller.error}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({mode.profile.result_field: controller.result}, ensure_ascii=False, indent=2))
    else:
        print(controller.result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
