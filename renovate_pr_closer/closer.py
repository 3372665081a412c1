"""Closes stale failing Renovate pull requests and deletes their branches."""

import logging
from typing import FrozenSet, List

from .api_client import GitHubAPIClient
from .filters import BOT_LOGINS, is_stale
from .models import CandidatePullRequest
from .query import create_stale_failing_renovate_pr_query


class StalePRCloser:
    """Finds stale failing Renovate PRs in one repository and closes them."""

    def __init__(self, repo: str, api_client: GitHubAPIClient,
                 bot_logins: FrozenSet[str] = BOT_LOGINS):
        """Initialize the closer.

        Args:
            repo: Repository in ``owner/name`` form
            api_client: Client exposing ``search_pull_requests``,
                ``update_pull_request_state`` and ``delete_ref``
            bot_logins: Logins whose comments and commits do not count as human
        """
        self.repo = repo
        self.owner, self.name = repo.split('/')
        self.api_client = api_client
        self.bot_logins = bot_logins

    def fetch_stale_prs(self) -> List[CandidatePullRequest]:
        """Search for stale failing Renovate PRs that no human has touched."""
        query_string = create_stale_failing_renovate_pr_query(self.repo)
        logging.info("Fetching pull requests")
        logging.debug(f"Search query: {query_string}")

        candidates = self.api_client.search_pull_requests(query_string)
        return [pr for pr in candidates if is_stale(pr, self.bot_logins)]

    def close_pull_request(self, pr: CandidatePullRequest):
        logging.info(f"Closing pull request: title={pr.title} number={pr.number} url={pr.url}")
        self.api_client.update_pull_request_state(self.owner, self.name, pr.number, 'closed')

    def delete_branch(self, pr: CandidatePullRequest):
        """Delete the PR's source branch, logging instead of raising on failure.

        The branch may already be gone, protected, or shared with another PR.
        """
        logging.info(f"Deleting ref: title={pr.title} ref={pr.head_ref_name}")
        try:
            self.api_client.delete_ref(self.owner, self.name, f"heads/{pr.head_ref_name}")
        except Exception as e:
            logging.warning(f"Failed to delete ref: ref={pr.head_ref_name}: {e}")

    def run(self) -> List[CandidatePullRequest]:
        """Close every stale PR and delete its branch, one at a time.

        A failure to close a PR propagates and stops the run; PRs handled
        before it stay closed.

        Returns:
            The pull requests that were closed
        """
        stale_prs = self.fetch_stale_prs()
        logging.info(f"The number of pull requests: {len(stale_prs)}")

        for pr in stale_prs:
            self.close_pull_request(pr)
            self.delete_branch(pr)

        return stale_prs
