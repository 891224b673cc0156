import argparse
import os
import sys
from collections import Counter
from pathlib import Path

import uvicorn

from logging_setup import setup_console_logging
from quiz_engine.errors import LoadFailure
from quiz_engine.store import HttpQuestionStore

setup_console_logging()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quiz practice tool")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the practice server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the question bank and the database",
    )

    for name, help_text in (
        ("check", "Fetch the question bank from a running server"),
        ("reload", "Force the server to regenerate its question bank"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument(
            "--url",
            default="http://127.0.0.1:8000",
            help="Base URL of the practice server",
        )
    return parser.parse_args(argv)


def serve(args: argparse.Namespace) -> None:
    if args.data_dir is not None:
        args.data_dir.mkdir(parents=True, exist_ok=True)
        os.environ["QUIZ_DATA_DIR"] = str(args.data_dir)

    uvicorn.run(
        "practice_api.app:app",
        host=args.host,
        port=args.port,
        log_level="info",
    )


def describe_bank(args: argparse.Namespace) -> int:
    store = HttpQuestionStore(args.url)
    try:
        questions = store.refresh() if args.command == "reload" else store.get_all()
    except LoadFailure as exc:
        print(f"Error loading questions: {exc}", file=sys.stderr)
        return 1

    print(f"Successfully loaded {len(questions)} questions.")
    answers = Counter(question.expected_answers for question in questions)
    for expected, count in sorted(answers.items()):
        print(f"  {count} question(s) expecting {expected} answer(s)")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "serve":
        serve(args)
        return 0
    return describe_bank(args)


if __name__ == "__main__":
    sys.exit(main())
