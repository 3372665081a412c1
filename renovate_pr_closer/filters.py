"""Human-involvement checks for candidate pull requests."""

from typing import Callable, FrozenSet, Iterable, Optional

from .models import CandidatePullRequest

# Logins of automation accounts; activity by anyone else counts as human
BOT_LOGINS: FrozenSet[str] = frozenset({'renovate[bot]', 'github-actions', 'jjenko'})


def _comment_login(comment) -> Optional[str]:
    if isinstance(comment, dict):
        return (comment.get('author') or {}).get('login')
    return comment.author_login


def _commit_login(commit) -> Optional[str]:
    if isinstance(commit, dict):
        author = (commit.get('commit') or {}).get('author') or {}
        return (author.get('user') or {}).get('login')
    return commit.author_login


def has_human_author(items: Iterable, get_login: Callable[[object], Optional[str]],
                     bot_logins: FrozenSet[str] = BOT_LOGINS) -> bool:
    """Check whether any item was authored by someone outside ``bot_logins``.

    A missing login is not a bot login, so such items count as human.

    Args:
        items: Comments, commits, or anything ``get_login`` understands
        get_login: Extracts the author login from an item
        bot_logins: Logins treated as automation accounts

    Returns:
        True if at least one item has a non-bot author
    """
    return any(get_login(item) not in bot_logins for item in items)


def is_commented_by_human(comments: Iterable, bot_logins: FrozenSet[str] = BOT_LOGINS) -> bool:
    return has_human_author(comments, _comment_login, bot_logins)


def is_committed_by_human(commits: Iterable, bot_logins: FrozenSet[str] = BOT_LOGINS) -> bool:
    return has_human_author(commits, _commit_login, bot_logins)


def is_stale(pr: CandidatePullRequest, bot_logins: FrozenSet[str] = BOT_LOGINS) -> bool:
    """A candidate is stale when no human has commented on or committed to it."""
    return (not is_commented_by_human(pr.comments, bot_logins)
            and not is_committed_by_human(pr.commits, bot_logins))
