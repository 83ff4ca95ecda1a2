"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from .constants import (
    DEFAULT_MODEL,
    MAX_COMMITS_TO_SUMMARIZE,
    MAX_QUERY_LENGTH,
    MAX_TOKENS,
    TEMPERATURE,
)


def parse_max_commits(value: str) -> int:
    """Parse a commit cap; it must be a positive integer."""
    value = value.strip()
    if not value.isdigit() or int(value) < 1:
        raise ValueError(f"max commits must be a positive integer, got {value!r}")
    return int(value)


@dataclass
class SummarizerConfig:
    github_token: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_TOKENS
    max_query_length: int = MAX_QUERY_LENGTH
    max_commits: int = MAX_COMMITS_TO_SUMMARIZE
    dry_run: bool = False

    @classmethod
    def from_env(cls) -> "SummarizerConfig":
        """Build config from environment variables, falling back to defaults.

        Blank values count as unset, which is what Actions passes for an
        input that was not given.

        Recognized variables:
            GITHUB_TOKEN, ANTHROPIC_API_KEY, SUMMARY_MODEL, SUMMARY_MAX_COMMITS
        """
        max_commits = (os.environ.get("SUMMARY_MAX_COMMITS") or "").strip()

        return cls(
            github_token=os.environ.get("GITHUB_TOKEN"),
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY"),
            model=os.environ.get("SUMMARY_MODEL") or DEFAULT_MODEL,
            max_commits=(
                parse_max_commits(max_commits) if max_commits
                else MAX_COMMITS_TO_SUMMARIZE
            ),
        )
