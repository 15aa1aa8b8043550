"""CLI entry point for gitgrade."""

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

import httpx


def _configure_logging(headless: bool) -> None:
    level = os.environ.get("GITGRADE_LOG_LEVEL", "WARNING").upper()
    if headless:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[gitgrade] %(levelname)s %(message)s"))
    else:
        from textual.logging import TextualHandler

        handler = TextualHandler()
    logging.basicConfig(level=level, handlers=[handler], force=True)


async def _analyze_to_json(owner: str, repo: str) -> str:
    from gitgrade.analyzer import Analyzer

    analyzer = Analyzer(on_status=lambda msg: print(msg, file=sys.stderr))
    try:
        result = await analyzer.inspect(owner, repo)
    finally:
        await analyzer.close()
    return result.model_dump_json(by_alias=True, indent=2)


def main(argv: Optional[list[str]] = None) -> int:
    """Launch the GitGrade TUI, or print a JSON report with --json."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN)

    parser = argparse.ArgumentParser(prog="gitgrade", description=__doc__)
    parser.add_argument("repo", nargs="?", help="GitHub URL or owner/repo")
    parser.add_argument(
        "--json", action="store_true", help="analyze headlessly and print the result as JSON"
    )
    args = parser.parse_args(argv)
    _configure_logging(headless=args.json)

    if args.json:
        from gitgrade.locator import parse_repo_locator

        if not args.repo:
            parser.error("--json requires a repository")
        try:
            owner, repo = parse_repo_locator(args.repo)
            print(asyncio.run(_analyze_to_json(owner, repo)))
        except (ValueError, httpx.HTTPError) as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        return 0

    from gitgrade.app import GitGradeApp

    app = GitGradeApp(initial_repo=args.repo)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
