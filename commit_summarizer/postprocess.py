"""Turn [file/path] tokens in generated summaries into PR diff links."""

import hashlib
import logging
from typing import List

from .constants import GITHUB_WEB_URL
from .models import DiffMetadata


def diff_anchor(file_path: str) -> str:
    """GitHub anchors each file in the PR "files" view by SHA-256 of its path."""
    return hashlib.sha256(file_path.encode("utf-8")).hexdigest()


def file_link(file_path: str, metadata: DiffMetadata) -> str:
    anchors = metadata.anchors or {}
    repo = metadata.repository
    return (
        f"{GITHUB_WEB_URL}/{repo.owner}/{repo.name}/pull/"
        f"{metadata.pr_number}/files#diff-{anchors.get(file_path, '')}"
    )


def postprocess_summary(
    files: List[str],
    summary: str,
    metadata: DiffMetadata
) -> str:
    """Replace each exact `[path]` for a path in `files` with a Markdown link.

    Bracketed text that is not one of the given paths is left as is.
    """
    logger = logging.getLogger(__name__)
    logger.debug(f"Postprocessing summary for {metadata.sha}, files: {files}")

    for file_path in files:
        token = f"[{file_path}]"
        if token in summary:
            summary = summary.replace(
                token, f"{token}({file_link(file_path, metadata)})"
            )

    logger.debug(f"Postprocessed summary:\n{summary}")
    return summary
