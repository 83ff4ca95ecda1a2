"""Main entry point for the commit summary bot."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import SummarizerConfig, parse_max_commits
from .event_context import load_event_payload, resolve_context
from .github_client import GitHubClient
from .processor import CommitProcessor
from .summary_generator import SummaryGenerator


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Post LLM-generated summaries of pull request commits"
    )
    parser.add_argument(
        "--event-path",
        default=None,
        help="Webhook payload JSON (defaults to $GITHUB_EVENT_PATH)"
    )
    parser.add_argument(
        "--repo",
        default=None,
        help="Repository as owner/name, overrides the event payload"
    )
    parser.add_argument(
        "--pr",
        type=int,
        default=None,
        help="Pull request number, overrides the event payload"
    )
    parser.add_argument(
        "--max-commits",
        type=parse_max_commits,
        default=None,
        help="Maximum commits to summarize in this run"
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model used for summaries"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log comments instead of posting them"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def run(args: argparse.Namespace) -> None:
    config = SummarizerConfig.from_env()
    if args.max_commits is not None:
        config.max_commits = args.max_commits
    if args.model:
        config.model = args.model
    config.dry_run = args.dry_run

    payload = load_event_payload(args.event_path)
    context = resolve_context(payload, repo=args.repo, pr_number=args.pr)
    # Fail on a missing repository before any client is built.
    context.require_repository()

    client = GitHubClient(config.github_token)
    generator = SummaryGenerator(
        api_key=config.anthropic_api_key,
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        max_query_length=config.max_query_length
    )
    processor = CommitProcessor(
        client,
        generator,
        max_commits=config.max_commits,
        dry_run=config.dry_run
    )
    processor.run(context)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        run(args)
    except Exception as e:
        logger.error(f"Commit summary run failed: {e}", exc_info=args.verbose)
        sys.exit(1)


if __name__ == "__main__":
    main()
