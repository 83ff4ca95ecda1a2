"""Data models for the commit summary bot."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


@dataclass
class Repository:
    """Owning repository of the pull request."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass
class CommitInfo:
    """Commit object as returned by the commits endpoint."""
    sha: str
    parents: List[str]
    files: List[str]
    tree_sha: Optional[str] = None

    @property
    def is_merge(self) -> bool:
        return len(self.parents) != 1


@dataclass
class DiffMetadata:
    """Per-commit context needed to build links into the PR files view."""
    sha: str
    pr_number: int
    repository: Repository
    anchors: Optional[Dict[str, str]] = None  # {file_path: diff anchor}


@dataclass
class FetchedDiff:
    """Raw diff text plus the files touched by the comparison."""
    text: str
    files: List[str] = field(default_factory=list)


@dataclass
class CompletionResult:
    """Outcome of a summary generation attempt."""
    ok: bool
    text: str = ""
    reason: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "CompletionResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, reason: str) -> "CompletionResult":
        return cls(ok=False, reason=reason)


class CommentKind(Enum):
    SUMMARY = "summary"
    MERGE_NOTICE = "merge_notice"
    ERROR = "error"


@dataclass
class SummaryComment:
    """A summary comment for a single commit, parsed or about to be posted."""
    commit_sha: str
    kind: CommentKind
    body: str


class CommitOutcome(Enum):
    SKIPPED = "skipped"
    MERGE_SKIPPED = "merge_skipped"
    SUMMARIZED = "summarized"
    ERRORED = "errored"


@dataclass
class RunReport:
    """Per-invocation tally of commit outcomes."""
    outcomes: Dict[str, CommitOutcome] = field(default_factory=dict)
    limit_reached: bool = False

    def record(self, sha: str, outcome: CommitOutcome) -> None:
        self.outcomes[sha] = outcome

    def count(self, outcome: CommitOutcome) -> int:
        return sum(1 for o in self.outcomes.values() if o == outcome)

    @property
    def commented(self) -> int:
        """Number of comments created (or logged, in dry-run mode)."""
        return len(self.outcomes) - self.count(CommitOutcome.SKIPPED)
