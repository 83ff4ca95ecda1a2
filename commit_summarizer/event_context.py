"""Resolve the pull request and repository the bot runs against.

Inside GitHub Actions the triggering webhook payload is written to the file
named by GITHUB_EVENT_PATH. For local runs the same values can be passed on
the command line instead.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .models import Repository


class RepositoryContextError(Exception):
    """Raised when the run has no repository or pull request to work on."""


@dataclass
class PullRequestContext:
    pr_number: int
    repository: Optional[Repository]

    def require_repository(self) -> Repository:
        if self.repository is None:
            raise RepositoryContextError("Repository undefined")
        return self.repository


def load_event_payload(event_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the webhook payload JSON, or an empty dict if there is none."""
    logger = logging.getLogger(__name__)
    path = event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not path:
        logger.debug("No event payload path configured")
        return {}

    with open(Path(path), encoding="utf-8") as f:
        payload = json.load(f)
    logger.debug(f"Loaded event payload from {path}")
    return payload


def repository_from_payload(payload: Dict[str, Any]) -> Optional[Repository]:
    repo = payload.get("repository")
    if not repo:
        return None
    return Repository(owner=repo["owner"]["login"], name=repo["name"])


def parse_repo_arg(full_name: str) -> Repository:
    """Parse an "owner/name" string."""
    owner, sep, name = full_name.partition("/")
    if not sep or not owner or not name:
        raise RepositoryContextError(
            f"Expected repository as owner/name, got {full_name!r}"
        )
    return Repository(owner=owner, name=name)


def resolve_context(
    payload: Dict[str, Any],
    repo: Optional[str] = None,
    pr_number: Optional[int] = None
) -> PullRequestContext:
    """Combine the event payload with command line overrides.

    Raises:
        RepositoryContextError: if no pull request number can be determined
    """
    if pr_number is None:
        pull_request = payload.get("pull_request") or {}
        pr_number = pull_request.get("number")
    if pr_number is None:
        raise RepositoryContextError(
            "No pull request in context; run on a pull_request event or pass --pr"
        )

    repository = parse_repo_arg(repo) if repo else repository_from_payload(payload)
    return PullRequestContext(pr_number=int(pr_number), repository=repository)
