"""Entry point — wires Config → TranscriptionService → HTTP server or one-shot CLI run."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn
from rich.console import Console
from rich.logging import RichHandler

from transcriber.api import create_app
from transcriber.config import Config
from transcriber.constants import (
    FIELD_PATH,
    FIELD_PROMPT,
    FIELD_SOURCE_TYPE,
    FIELD_URL,
    MSG_CLI_SAVED,
    MSG_SERVICE_STARTING,
    SOURCE_FILE,
    SOURCE_URL,
)
from transcriber.dependencies import build_service
from transcriber.errors import TranscriptionFailure, ValidationError

console = Console()
err_console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(console=err_console, rich_tracebacks=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcriber",
        description="Transcribe video or audio with OpenAI Whisper",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the HTTP API")

    run = sub.add_parser("transcribe", help="Transcribe one URL or local file")
    source = run.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Remote media URL")
    source.add_argument("--path", help="Local media file")
    run.add_argument("--prompt", help="Vocabulary or spelling hints for the model")
    run.add_argument("--output", "-o", type=Path, help="Write the transcript to this file")
    return parser


def request_from_args(args: argparse.Namespace) -> dict[str, Optional[str]]:
    match (args.url, args.path):
        case (str() as url, _):
            request = {FIELD_SOURCE_TYPE: SOURCE_URL, FIELD_URL: url}
        case (_, path):
            request = {FIELD_SOURCE_TYPE: SOURCE_FILE, FIELD_PATH: path}
    request[FIELD_PROMPT] = args.prompt
    return request


async def run_once(config: Config, args: argparse.Namespace) -> int:
    service = build_service(config)
    try:
        result = await service.run(request_from_args(args))
    except ValidationError as exc:
        list(map(lambda i: err_console.print(f"[red]{i.field}[/red]: {i.message}"), exc.issues))
        return 1
    except TranscriptionFailure as exc:
        err_console.print(f"[red]Error:[/red] {exc.message}")
        return 1
    finally:
        await service.aclose()

    match args.output:
        case None:
            console.print(result.transcript, markup=False, highlight=False)
        case Path() as output:
            output.write_text(result.transcript + "\n", encoding="utf-8")
            console.print(MSG_CLI_SAVED % output)
    return 0


def serve(config: Config) -> None:
    logger = logging.getLogger(__name__)
    logger.info(MSG_SERVICE_STARTING, config.host, config.port)
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    config = Config.from_env()
    _setup_logging(config.log_level)

    match args.command:
        case "serve":
            serve(config)
        case "transcribe":
            sys.exit(asyncio.run(run_once(config, args)))


if __name__ == "__main__":
    main()
