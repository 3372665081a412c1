#!/usr/bin/env python3
"""
Stale Renovate PR Closer
Closes open Renovate PRs with failing CI that no human has touched for a week,
and deletes their branches.
"""

import os
import sys
import logging
from dotenv import load_dotenv

from renovate_pr_closer.api_client import GitHubAPIClient
from renovate_pr_closer.closer import StalePRCloser
from renovate_pr_closer.config import ConfigurationError, load_settings

# Configure logging (can be overridden by LOG_LEVEL environment variable)
log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format='%(asctime)s %(levelname)s: %(message)s',
    datefmt='%m/%d/%Y %I:%M:%S %p'
)


def main():
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.error(str(e))
        sys.exit(1)

    logging.info(f"Closing stale failing Renovate PRs in {settings.repo}")

    closer = StalePRCloser(settings.repo, GitHubAPIClient(settings.token), settings.bot_logins)
    try:
        closed = closer.run()
    except Exception as e:
        logging.error(f"Error closing stale pull requests in {settings.repo}: {e}", exc_info=True)
        sys.exit(1)

    logging.info(f"Done, closed {len(closed)} pull request(s)")


if __name__ == "__main__":
    main()
