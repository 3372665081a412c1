"""Search query construction for stale Renovate pull requests."""

from datetime import datetime, timedelta, timezone

RENOVATE_AUTHOR = 'app/renovate'
STALE_AFTER_DAYS = 7


def format_date(date: datetime) -> str:
    """Format a point in time for the GitHub search ``created:`` qualifier.

    Sub-second precision is dropped and the UTC offset is written as
    ``+00:00`` rather than ``Z``. Naive datetimes are treated as UTC.

    Args:
        date: The point in time to format

    Returns:
        String such as ``2021-09-01T12:30:45+00:00``
    """
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return date.astimezone(timezone.utc).replace(microsecond=0).isoformat()


def create_search_pr_query(repo: str, author: str, created_before: datetime,
                           additional_filter: str, ci_status: str, pr_state: str) -> str:
    """Build a GitHub issue search query matching pull requests.

    Args:
        repo: Repository in ``owner/name`` form
        author: Author qualifier, e.g. ``app/renovate``
        created_before: Only match PRs created on or before this time
        additional_filter: Free text appended verbatim (may be empty)
        ci_status: Combined commit status, e.g. ``failure``
        pr_state: PR state, e.g. ``open``

    Returns:
        The search query string
    """
    created = format_date(created_before)
    query = (f"type:pr repo:{repo} author:{author} created:<={created} "
             f"state:{pr_state} status:{ci_status}")
    return f"{query} {additional_filter}".strip()


def create_stale_failing_renovate_pr_query(repo: str, now: datetime = None) -> str:
    """Build the query for stale failing Renovate PRs.

    A stale failing Renovate PR was opened by the Renovate app at least
    seven days ago, is still open, and its CI status is failing.

    Args:
        repo: Repository in ``owner/name`` form
        now: Reference time, defaults to the current time

    Returns:
        The search query string
    """
    if now is None:
        now = datetime.now(timezone.utc)
    created_before = now - timedelta(days=STALE_AFTER_DAYS)
    return create_search_pr_query(
        repo,
        RENOVATE_AUTHOR,
        created_before,
        additional_filter='',
        ci_status='failure',
        pr_state='open'
    )
