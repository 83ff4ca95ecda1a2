"""Serialize and parse the bot's per-commit summary comments."""

import re
from typing import Any, Dict, Iterable, Optional, Set

from .constants import COMMENT_HEADER, ERROR_MESSAGE, MERGE_COMMIT_MESSAGE
from .models import CommentKind, CompletionResult, SummaryComment


HEADER_PATTERN = re.compile(r"^GPT summary of ([0-9a-fA-F]+):(.*)", re.DOTALL)


def format_comment(comment: SummaryComment) -> str:
    header = COMMENT_HEADER.format(sha=comment.commit_sha)
    return f"{header}\n\n{comment.body}"


def parse_comment(body: Optional[str]) -> Optional[SummaryComment]:
    """Parse a comment body; returns None for comments the bot did not write."""
    if not body:
        return None
    match = HEADER_PATTERN.match(body)
    if not match:
        return None

    content = match.group(2).strip()
    if content == MERGE_COMMIT_MESSAGE:
        kind = CommentKind.MERGE_NOTICE
    elif content == ERROR_MESSAGE:
        kind = CommentKind.ERROR
    else:
        kind = CommentKind.SUMMARY
    return SummaryComment(commit_sha=match.group(1), kind=kind, body=content)


def summarized_shas(comments: Iterable[Dict[str, Any]]) -> Set[str]:
    """Commit shas that already have a summary comment of any kind."""
    shas = set()
    for comment in comments:
        parsed = parse_comment(comment.get("body"))
        if parsed:
            shas.add(parsed.commit_sha)
    return shas


def merge_notice(sha: str) -> SummaryComment:
    return SummaryComment(
        commit_sha=sha, kind=CommentKind.MERGE_NOTICE, body=MERGE_COMMIT_MESSAGE
    )


def from_completion(sha: str, result: CompletionResult) -> SummaryComment:
    """Failed generations still produce a visible comment."""
    if result.ok:
        return SummaryComment(commit_sha=sha, kind=CommentKind.SUMMARY, body=result.text)
    return SummaryComment(commit_sha=sha, kind=CommentKind.ERROR, body=ERROR_MESSAGE)
