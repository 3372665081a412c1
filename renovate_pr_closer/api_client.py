"""GitHub API client for the three calls the closer needs."""

import logging
from typing import Dict, List
from urllib.parse import quote
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .models import CandidatePullRequest

API_URL = "https://api.github.com"
GRAPHQL_URL = f"{API_URL}/graphql"

# Single page only: the 100 most recent matches, each with its 100 most
# recent commits and comments
SEARCH_PULL_REQUESTS_QUERY = """
query SearchStaleFailingRenovatePR($queryString: String!) {
  search(query: $queryString, type: ISSUE, last: 100) {
    nodes {
      ... on PullRequest {
        number
        title
        url
        headRefName
        author {
          login
        }
        commits(last: 100) {
          nodes {
            commit {
              author {
                user {
                  login
                }
              }
            }
          }
        }
        comments(last: 100) {
          nodes {
            author {
              login
            }
          }
        }
      }
    }
  }
}
"""


class GitHubAPIClient:
    """Handles GitHub GraphQL search and REST pull request/ref mutations."""

    def __init__(self, token: str = None):
        """Initialize the GitHub API client.

        Args:
            token: GitHub access token for authentication
        """
        self.token = token
        self.session = requests.Session()

        # Failed requests are never retried
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})
        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Closing PRs and deleting refs will fail.")
            logging.warning("Set the github_token input or GITHUB_TOKEN environment variable.")

    def post_graphql(self, query: str, variables: Dict = None) -> Dict:
        """Make a GraphQL query to the GitHub API.

        Args:
            query: GraphQL query string
            variables: Optional query variables

        Returns:
            The ``data`` member of the JSON response

        Raises:
            Exception: If the response carries GraphQL errors
            requests.exceptions.HTTPError: On a non-2xx response
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        response = self.session.post(GRAPHQL_URL, json=payload)
        response.raise_for_status()
        result = response.json()

        if "errors" in result:
            logging.error(f"GraphQL errors: {result['errors']}")
            raise Exception(f"GraphQL query failed: {result['errors']}")

        return result.get("data") or {}

    def search_pull_requests(self, query_string: str) -> List[CandidatePullRequest]:
        """Run an issue search and return the pull requests it matched.

        Args:
            query_string: GitHub search query, see ``query.create_search_pr_query``

        Returns:
            Candidates in the order the search returned them
        """
        data = self.post_graphql(SEARCH_PULL_REQUESTS_QUERY, {"queryString": query_string})
        nodes = (data.get("search") or {}).get("nodes") or []

        candidates = []
        for node in nodes:
            # Non-PR issues match the search with an empty projection
            if not node or 'number' not in node:
                logging.debug("Skipping search result that is not a pull request")
                continue
            candidates.append(CandidatePullRequest.from_node(node))

        logging.debug(f"Search returned {len(candidates)} pull requests")
        return candidates

    def update_pull_request_state(self, owner: str, repo: str, pull_number: int, state: str):
        """Set the state of a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number
            state: ``open`` or ``closed``

        Raises:
            requests.exceptions.HTTPError: On a non-2xx response
        """
        url = f"{API_URL}/repos/{owner}/{repo}/pulls/{pull_number}"
        response = self.session.patch(url, json={'state': state})
        response.raise_for_status()

    def delete_ref(self, owner: str, repo: str, ref: str):
        """Delete a git reference such as ``heads/<branch>``.

        Raises:
            requests.exceptions.HTTPError: On a non-2xx response
        """
        url = f"{API_URL}/repos/{owner}/{repo}/git/refs/{quote(ref, safe='/')}"
        response = self.session.delete(url)
        response.raise_for_status()
