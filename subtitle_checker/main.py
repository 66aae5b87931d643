import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from subtitle_checker.config.settings import Settings
from subtitle_checker.logging.logger import Log
from subtitle_checker.processor.exceptions import ProcessorError
from subtitle_checker.report.console_reporter import ConsoleReporter
from subtitle_checker.worker.orchestrator import build_orchestrator

_EPILOG = """\
environment:
  OPENROUTER_API_KEY       API key for the default OpenRouter provider
  ANALYSIS_PROVIDER        openrouter, openai, openai_compatible, ollama or example
  MAX_CONCURRENCY=N        concurrent analysis requests (default: 3)
  OPENROUTER_MODEL_NAME    model used with OpenRouter
  DEEPSEEK_MODEL           model used with the local Ollama provider

Only new or modified files are analyzed; corrected files keep a .backup copy.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subtitle-checker",
        description="Check WebVTT subtitles for spelling and grammar mistakes and fix them.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        help="directory with subtitle files (default: SUBTITLES_DIR or ./subtitles)",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="reprocess all files, ignoring the processing state",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=_positive_int,
        help="maximum concurrent analysis requests (overrides MAX_CONCURRENCY)",
    )
    return parser


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> load settings -> run once -> print report."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    Log.configure(settings.log_level)

    directory = args.directory if args.directory is not None else settings.subtitles_dir
    concurrency = args.concurrency if args.concurrency is not None else settings.max_concurrency
    Log.info(
        f"Starting subtitle spell & grammar checker "
        f"({settings.analysis_provider}, {concurrency} concurrent requests)"
    )

    try:
        orchestrator = build_orchestrator(settings)
        report = asyncio.run(
            orchestrator.run(directory, force=args.force, concurrency_limit=concurrency)
        )
    except KeyboardInterrupt:
        Log.warning("Process interrupted by user")
        return 0
    except (ProcessorError, ValueError) as exc:
        Log.error(f"Could not run: {exc}")
        return 1
    except Exception:
        Log.exception("Unhandled error")
        return 1

    ConsoleReporter().render(report)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
