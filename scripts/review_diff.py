"""Review a local diff file (or stdin) and print the merged result as JSON."""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env.local
env_path = Path(__file__).parent.parent / ".env.local"
load_dotenv(env_path)

from codereview.services.review_service import build_review_service  # noqa: E402
from codereview.utils.logging import setup_logging  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Run the security, performance and style analyzers over a diff",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  git diff main | python scripts/review_diff.py
  python scripts/review_diff.py changes.patch --sequential
        """,
    )
    parser.add_argument(
        "patch_file", nargs="?", help="Diff file to review (default: stdin)"
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run analyzers one after another instead of concurrently",
    )
    args = parser.parse_args()

    setup_logging(stream=sys.stderr)

    if args.patch_file:
        patch = Path(args.patch_file).read_text(encoding="utf-8")
    else:
        patch = sys.stdin.read()

    result = build_review_service().review(patch, run_parallel=not args.sequential)
    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
