"""Resolve a commit comparison into its raw diff text."""

import logging
from typing import Any, Dict

from .github_client import GitHubClient
from .models import FetchedDiff


def fetch_diff(client: GitHubClient, comparison: Dict[str, Any]) -> FetchedDiff:
    """Follow a comparison's `diff_url` and return the unified diff.

    The comparison is re-read through its API `url` so the `diff_url` and
    file list are current. Failures propagate to the caller.
    """
    logger = logging.getLogger(__name__)

    resolved = client.get_json(comparison["url"])
    raw_diff = client.get_text(resolved["diff_url"])
    files = [f["filename"] for f in resolved.get("files", [])]

    logger.debug(f"Fetched diff ({len(raw_diff)} chars, {len(files)} files)")
    logger.debug(f"Raw diff:\n{raw_diff}")
    return FetchedDiff(text=raw_diff, files=files)
