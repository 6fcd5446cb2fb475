#!/usr/bin/env python3
"""
External PR Viewer - Main CLI entrypoint

Lists open pull requests of a GitHub repository, hiding those opened by
excluded authors (typically the core team) so external contributions
stand out.

Usage:
    python main.py list                                    # Configured repo (default expo/expo)
    python main.py list --repo facebook/react --exclude gaearon
    python main.py list --include brentvatne               # Show one excluded author again
    python main.py serve --port 8080                       # HTTP API
"""

import argparse
import sys
from typing import Optional

from models.config_models import Config, RepositoryConfig
from utils.config_loader import load_config
from utils.logger import setup_logger
from viewer.formatting import format_header, format_pr_lines
from viewer.state import PullRequestStore

logger = setup_logger(name=__name__)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """
    Apply command-line overrides to the loaded configuration.

    Args:
        config: Configuration loaded from the environment
        args: Parsed `list` arguments

    Returns:
        A new Config (the loaded one is not modified)

    Raises:
        ValueError: If --repo is malformed
    """
    update = {}
    if args.repo:
        update["repository"] = RepositoryConfig.parse(args.repo)

    fetch_update = {}
    if args.per_page is not None:
        fetch_update["per_page"] = args.per_page
    if args.max_pages is not None:
        fetch_update["max_pages"] = args.max_pages
    if fetch_update:
        update["fetch"] = config.fetch.model_copy(update=fetch_update)

    updated = config.model_copy(update=update)
    # Re-validate so out-of-range CLI values fail the same way env values do
    return Config.model_validate(updated.model_dump())


def list_prs(
    config: Config,
    exclude: Optional[list[str]] = None,
    include: Optional[list[str]] = None,
    show_excluded: bool = False,
    store: Optional[PullRequestStore] = None
) -> bool:
    """
    Fetch open PRs and print those not written by excluded authors.

    Args:
        config: Validated configuration
        exclude: Extra logins to hide for this run
        include: Logins to remove from the excluded set for this run
        show_excluded: Print the excluded-author list before the PRs
        store: Store to use (optional, built from config if not provided)

    Returns:
        bool: True if the fetch succeeded, False otherwise
    """
    if store is None:
        store = PullRequestStore.from_config(config)

    for login in exclude or []:
        store.add_excluded_author(login)
    for login in include or []:
        store.remove_excluded_author(login)

    if show_excluded:
        excluded = store.excluded_authors
        print(f"Excluded authors ({len(excluded)}): {', '.join(excluded) or '(none)'}")
        print("")

    state = store.load()

    if state.status == "error":
        logger.error(f"Failed to fetch PRs: {state.error}")
        print(f"Error: {state.error}", file=sys.stderr)
        print("Run the command again to retry.", file=sys.stderr)
        return False

    print(format_header(store.repository.full_name, len(state.filtered), len(state.accumulated)))
    print("")
    for pr in state.filtered:
        for line in format_pr_lines(pr):
            print(line)

    return True


def main():
    parser = argparse.ArgumentParser(
        description="List externally-submitted open PRs of a GitHub repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open PRs of the configured repository (default expo/expo)
  python main.py list

  # Another repository, hiding one more author
  python main.py list --repo facebook/react --exclude gaearon

  # Start the HTTP API
  python main.py serve --port 8080
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # List command
    list_parser = subparsers.add_parser(
        "list",
        help="Fetch and print open PRs from external authors"
    )
    list_parser.add_argument(
        "--repo",
        default=None,
        help="Repository in format 'owner/name' or full GitHub URL (default: GITHUB_REPO or expo/expo)"
    )
    list_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="LOGIN",
        help="Also hide PRs by this login (repeatable)"
    )
    list_parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="LOGIN",
        help="Show PRs by this otherwise-excluded login (repeatable)"
    )
    list_parser.add_argument(
        "--per-page",
        type=int,
        default=None,
        help="PRs per API request, max 100 (default: PER_PAGE or 100)"
    )
    list_parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Maximum number of pages to fetch (default: MAX_PAGES or 5)"
    )
    list_parser.add_argument(
        "--show-excluded",
        action="store_true",
        help="Print the excluded-author list before the PRs"
    )

    # Serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the HTTP API"
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the API server on (default: 8000)"
    )
    serve_parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind the server to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload (use for production)"
    )

    args = parser.parse_args()

    # Show help if no command provided
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "list":
        config = load_config()
        setup_logger(config.log_level, name=__name__)

        try:
            config = apply_overrides(config, args)
        except ValueError as e:
            logger.error(f"Invalid arguments: {e}")
            sys.exit(1)

        success = list_prs(
            config,
            exclude=args.exclude,
            include=args.include,
            show_excluded=args.show_excluded,
        )
        sys.exit(0 if success else 1)

    elif args.command == "serve":
        from backend.server import run_server
        run_server(args.host, args.port, reload=not args.no_reload)
        sys.exit(0)


if __name__ == "__main__":
    main()
