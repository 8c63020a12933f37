import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from docextract.config.settings import Settings
from docextract.extraction.exceptions import ExtractionError
from docextract.extraction.placeholder import build_placeholder_response
from docextract.llm.exceptions import LLMError
from docextract.logging.logger import Log
from docextract.pdf.exceptions import RasterizationError
from docextract.processor.processor import build_coordinator
from docextract.processor.request_loader import RequestLoader


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docextract",
        description="Extract schema-shaped JSON from PDFs and images with a vision LLM.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser("extract", help="run an extraction request file")
    extract.add_argument("request", type=Path, help="path to an extraction request JSON file")
    extract.add_argument("--output", type=Path, help="write the result here instead of stdout")

    placeholder = commands.add_parser(
        "placeholder", help="print a sample response for a request's schema"
    )
    placeholder.add_argument("request", type=Path)

    commands.add_parser("health", help="check that the LLM endpoint is reachable")
    commands.add_parser("models", help="list models offered by the LLM endpoint")
    return parser


def _write(payload: Any, output: Path | None = None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        output.write_text(text + "\n", encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> build dependencies -> run one command."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        if args.command == "placeholder":
            request = RequestLoader().load(args.request)
            _write(build_placeholder_response(request.expected_schema, request.metadata))
            return 0

        coordinator = build_coordinator(settings)
        if args.command == "health":
            healthy = coordinator.health_check()
            _write({"healthy": healthy})
            return 0 if healthy else 1
        if args.command == "models":
            _write({"models": coordinator.list_models()})
            return 0

        request = RequestLoader().load(args.request)
        _write(coordinator.extract_request(request), args.output)
        return 0
    except (ExtractionError, LLMError, RasterizationError, FileNotFoundError, ValueError) as exc:
        Log.error(f"{type(exc).__name__}: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
