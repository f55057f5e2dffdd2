"""
Operator CLI for the Mentor evaluation pipeline.

Architectural role:
- Terminal interface over `mentor_api.core.engine`, sharing the exact pipeline
  used by the HTTP adapter.
- `--dry-run` previews the composed prompt without calling the provider.

Request lifecycle:
1. Read the essay from a file (or stdin when the path is `-`).
2. Validate and compose.
3. Print the prompt (dry run) or invoke the provider and print the feedback.

Error handling strategy:
- Validation failures and unreadable essay files print to stderr and exit with status 1.
- Configuration and provider failures print to stderr and exit with status 2.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import asyncio
import sys

from mentor_api.core.engine import prepare_prompt, process_submission
from mentor_api.core.errors import ESSAY_TOO_LONG, MentorError, ProviderRejectedError, ValidationError
from mentor_api.core.pipeline_types import Submission
from mentor_api.llm.provider_config import load_evaluation_variant, load_provider_settings
from mentor_api.prompting.tone_templates import list_modes


def build_parser() -> argparse.ArgumentParser:
    modes = ", ".join(list_modes())
    parser = argparse.ArgumentParser(
        prog="mentor-cli",
        description="Generate Mentor feedback for an essay file.",
    )
    parser.add_argument("essay_file", help="Path to the essay text file, or '-' for stdin.")
    parser.add_argument("--mode", default=None, help=f"Feedback mode ({modes}).")
    parser.add_argument("--task-title", default=None)
    parser.add_argument("--quote", default=None)
    parser.add_argument("--instruction", default=None)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the composed prompt and output budget without calling the provider.",
    )
    return parser


def read_essay(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        submission = Submission(
            text=read_essay(args.essay_file),
            mode=args.mode,
            task_title=args.task_title,
            quote=args.quote,
            instruction=args.instruction,
        )
        variant = load_evaluation_variant()

        if args.dry_run:
            normalized, document = prepare_prompt(submission, variant)
            print(f"# mode={document.mode} shape={document.shape} "
                  f"words={normalized.word_count} max_output_tokens={document.max_output_tokens}")
            print(document.text)
            return 0

        result = asyncio.run(process_submission(submission, load_provider_settings(), variant))

    except (OSError, UnicodeDecodeError) as err:
        print(f"Cannot read essay file: {err}", file=sys.stderr)
        return 1

    except ValueError as err:
        print(f"Invalid configuration: {err}", file=sys.stderr)
        return 2

    except ValidationError as err:
        if err.kind == ESSAY_TOO_LONG:
            print(f"{err.message} (word count: {err.word_count})", file=sys.stderr)
        else:
            print(err.message, file=sys.stderr)
        return 1

    except ProviderRejectedError as err:
        print(f"Provider error ({err.status_code}): {err.details}", file=sys.stderr)
        return 2

    except MentorError as err:
        print(str(err), file=sys.stderr)
        return 2

    print(result.feedback_text)
    if result.tokens_used is not None:
        print(f"\n[tokens used: {result.tokens_used}]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
