"""Runtime settings read from the environment."""

import os
import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .filters import BOT_LOGINS


class ConfigurationError(Exception):
    """Raised when a required setting is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """Settings for a single closer run."""
    repo: str
    token: Optional[str] = None
    bot_logins: FrozenSet[str] = BOT_LOGINS


def get_current_repo() -> str:
    """Return the ``owner/name`` repository from ``GITHUB_REPOSITORY``.

    Raises:
        ConfigurationError: If the variable is unset, empty, or not ``owner/name``
    """
    repo = os.environ.get('GITHUB_REPOSITORY', '').strip()
    if not repo:
        raise ConfigurationError("GITHUB_REPOSITORY isn't set")

    parts = repo.split('/')
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(f"GITHUB_REPOSITORY must be in owner/name form, got '{repo}'")
    return repo


def get_github_token() -> Optional[str]:
    """Return the ``github_token`` action input, falling back to ``GITHUB_TOKEN``."""
    return os.environ.get('INPUT_GITHUB_TOKEN') or os.environ.get('GITHUB_TOKEN')


def get_bot_logins() -> FrozenSet[str]:
    """Return the bot login set, overridable via comma-separated ``BOT_LOGINS``."""
    bot_logins_env = os.environ.get('BOT_LOGINS')
    if not bot_logins_env:
        return BOT_LOGINS

    bot_logins = frozenset(b.strip() for b in bot_logins_env.split(',') if b.strip())
    if not bot_logins:
        logging.warning(f"Invalid BOT_LOGINS value '{bot_logins_env}', using defaults")
        return BOT_LOGINS

    logging.info(f"Using bot logins from environment: {', '.join(sorted(bot_logins))}")
    return bot_logins


def load_settings() -> Settings:
    """Collect all settings from the environment.

    Raises:
        ConfigurationError: If the repository is not configured
    """
    return Settings(
        repo=get_current_repo(),
        token=get_github_token(),
        bot_logins=get_bot_logins()
    )
