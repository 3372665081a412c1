"""Data models for stale pull request candidates."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Commit:
    """A commit on a candidate PR, reduced to its author login."""
    author_login: Optional[str] = None  # None when the commit is not linked to a GitHub account

    @classmethod
    def from_node(cls, node: Dict) -> 'Commit':
        commit = node.get('commit') or {}
        author = commit.get('author') or {}
        user = author.get('user') or {}
        return cls(author_login=user.get('login'))


@dataclass(frozen=True)
class Comment:
    """A comment on a candidate PR, reduced to its author login."""
    author_login: Optional[str] = None  # None for deleted accounts

    @classmethod
    def from_node(cls, node: Dict) -> 'Comment':
        author = node.get('author') or {}
        return cls(author_login=author.get('login'))


@dataclass(frozen=True)
class CandidatePullRequest:
    """A pull request returned by the stale PR search."""
    number: int
    title: str
    url: str
    head_ref_name: str
    author_login: Optional[str] = None
    commits: Tuple[Commit, ...] = ()
    comments: Tuple[Comment, ...] = ()

    @classmethod
    def from_node(cls, node: Dict) -> 'CandidatePullRequest':
        """Build a candidate from a GraphQL ``search`` result node.

        Args:
            node: A ``PullRequest`` node as projected by the search query

        Returns:
            CandidatePullRequest with commits and comments in response order
        """
        author = node.get('author') or {}
        commit_nodes = (node.get('commits') or {}).get('nodes') or []
        comment_nodes = (node.get('comments') or {}).get('nodes') or []
        return cls(
            number=node['number'],
            title=node.get('title', ''),
            url=node.get('url', ''),
            head_ref_name=node['headRefName'],
            author_login=author.get('login'),
            commits=tuple(Commit.from_node(c) for c in commit_nodes if c is not None),
            comments=tuple(Comment.from_node(c) for c in comment_nodes if c is not None),
        )
