"""Stale Renovate PR Closer - closes failing Renovate PRs nobody has touched."""

from .models import CandidatePullRequest, Comment, Commit
from .api_client import GitHubAPIClient
from .config import ConfigurationError, Settings, load_settings
from .filters import BOT_LOGINS, is_commented_by_human, is_committed_by_human, is_stale
from .query import create_search_pr_query, create_stale_failing_renovate_pr_query, format_date
from .closer import StalePRCloser

__all__ = [
    'CandidatePullRequest',
    'Comment',
    'Commit',
    'GitHubAPIClient',
    'ConfigurationError',
    'Settings',
    'load_settings',
    'BOT_LOGINS',
    'is_commented_by_human',
    'is_committed_by_human',
    'is_stale',
    'create_search_pr_query',
    'create_stale_failing_renovate_pr_query',
    'format_date',
    'StalePRCloser',
]
