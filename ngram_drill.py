"""
Command line entry point for the n-gram drill.

Examples:
    python ngram_drill.py phrases --source trigrams --scope 100 --combination 3
    python ngram_drill.py analyze essay.txt --top 10 --csv exports/
    python ngram_drill.py serve --port 5000
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from app import create_app, load_settings
from helpers.log_util import configure_logging
from models.exceptions import PracticeError
from models.ngram_analyzer import NgramType
from models.phrase_generator import seeded_permuter
from models.practice_settings import SCOPE_OPTIONS, GeneratorParameters
from services.export_service import export_filename, export_ngrams
from services.practice_service import PracticeService

logger = logging.getLogger("ngram_drill")

EXIT_CONFIG_ERROR = 2


def _scope(value: str) -> Optional[int]:
    if value.lower() in ("all", "none"):
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"scope must be an integer or 'all', got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="N-gram typing drill")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    parser.add_argument("--settings", default=None, help="JSON settings file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    phrases = subparsers.add_parser("phrases", help="Generate practice phrases")
    phrases.add_argument("--source", default=NgramType.BIGRAMS.value)
    phrases.add_argument(
        "--scope",
        type=_scope,
        default=argparse.SUPPRESS,
        help=f"Top-N entries to use: {', '.join(map(str, SCOPE_OPTIONS))} or 'all'",
    )
    phrases.add_argument("--combination", type=int, default=argparse.SUPPRESS)
    phrases.add_argument("--repetition", type=int, default=argparse.SUPPRESS)
    phrases.add_argument("--custom-words", default=None, help="File of custom words")
    phrases.add_argument("--seed", type=int, default=None, help="Seed for a repeatable shuffle")

    analyze = subparsers.add_parser("analyze", help="Rank the n-grams of a text file")
    analyze.add_argument("file", help="Text file to analyze ('-' for stdin)")
    analyze.add_argument("--top", type=int, default=20)
    analyze.add_argument("--csv", default=None, help="Directory to write CSV rankings to")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="localhost")
    serve.add_argument("--port", type=int, default=5000)
    return parser


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def run_phrases(args: argparse.Namespace, service: PracticeService) -> int:
    if args.custom_words:
        service.set_custom_words(_read_text(args.custom_words))
    stored = service.settings.for_source(args.source).parameters().as_kwargs()
    # Options given on the command line override the stored settings
    for field in ("scope", "combination", "repetition"):
        if hasattr(args, field):
            stored[field] = getattr(args, field)
    params = GeneratorParameters.from_mapping(stored)
    for phrase in service.generate(args.source, params).phrases:
        print(phrase)
    return 0


def run_analyze(args: argparse.Namespace, service: PracticeService) -> int:
    analysis = service.analyze(_read_text(args.file), top_n=args.top)
    for name, ranked in analysis.top.items():
        print(f"== {name} ==")
        for ngram, freq in ranked:
            print(f"{freq:6d}  {ngram}")
    if args.csv:
        out_dir = Path(args.csv)
        out_dir.mkdir(parents=True, exist_ok=True)
        for name in analysis.tables:
            target = out_dir / export_filename(f"generated_{name}")
            export_ngrams(analysis.ranked(name), str(target))
            logger.info("Wrote %s", target)
    return 0


def run_serve(args: argparse.Namespace) -> int:
    create_app(args.settings).run(host=args.host, port=args.port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "serve":
        return run_serve(args)

    try:
        service = PracticeService(
            settings=load_settings(args.settings),
            permuter=seeded_permuter(args.seed) if getattr(args, "seed", None) is not None else None,
        )
        if args.command == "phrases":
            return run_phrases(args, service)
        return run_analyze(args, service)
    except PracticeError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR
    except OSError as exc:
        logger.error("Cannot read input: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
