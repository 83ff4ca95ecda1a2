"""Core loop: summarize each not-yet-summarized commit of a pull request."""

import logging
from typing import Any, Dict, Optional

from .comments import format_comment, from_completion, merge_notice, summarized_shas
from .constants import MAX_COMMITS_TO_SUMMARIZE
from .diff_fetcher import fetch_diff
from .event_context import PullRequestContext
from .github_client import GitHubClient
from .models import (
    CommentKind,
    CommitInfo,
    CommitOutcome,
    CompletionResult,
    DiffMetadata,
    Repository,
    RunReport,
    SummaryComment,
)
from .postprocess import diff_anchor, postprocess_summary
from .summary_generator import SummaryGenerator


class CommitProcessor:
    """Posts one summary comment per commit, at most max_commits per run."""

    def __init__(
        self,
        github_client: GitHubClient,
        generator: SummaryGenerator,
        max_commits: int = MAX_COMMITS_TO_SUMMARIZE,
        dry_run: bool = False
    ):
        if max_commits < 1:
            raise ValueError(f"max_commits must be at least 1, got {max_commits}")
        self.client = github_client
        self.generator = generator
        self.max_commits = max_commits
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

    def run(self, context: PullRequestContext) -> RunReport:
        """Process the PR's commits in listing order.

        Raises:
            RepositoryContextError: if the context has no repository; no
                network call is made in that case.
        """
        repository = context.require_repository()
        pr_number = context.pr_number
        report = RunReport()

        self.logger.info(f"Summarizing commits of {repository.full_name}#{pr_number}")

        done = summarized_shas(
            self.client.list_issue_comments(repository, pr_number)
        )
        commits = self.client.list_pr_commits(repository, pr_number)
        self.logger.info(
            f"Found {len(commits)} commits, {len(done)} already summarized"
        )

        commits_summarized = 0
        for commit in commits:
            sha = commit["sha"]
            if sha in done:
                self.logger.debug(f"Skipping {sha}: summary already posted")
                report.record(sha, CommitOutcome.SKIPPED)
                continue

            comment = self._summarize_commit(repository, pr_number, sha)
            self._post(repository, pr_number, comment)
            report.record(sha, _outcome_for(comment))

            commits_summarized += 1
            if commits_summarized >= self.max_commits:
                report.limit_reached = True
                self.logger.info(
                    "Max commits summarized - if you want to summarize more, "
                    "rerun the action. This is a protection against spamming "
                    "the PR with comments"
                )
                break

        self.logger.info(
            f"Done: {report.count(CommitOutcome.SUMMARIZED)} summarized, "
            f"{report.count(CommitOutcome.MERGE_SKIPPED)} merge commits, "
            f"{report.count(CommitOutcome.ERRORED)} errors, "
            f"{report.count(CommitOutcome.SKIPPED)} already summarized"
        )
        return report

    def _summarize_commit(
        self,
        repository: Repository,
        pr_number: int,
        sha: str
    ) -> SummaryComment:
        commit = self.client.get_commit(repository, sha)
        self._log_tree(repository, commit)

        if commit.is_merge:
            self.logger.info(
                f"{sha} has {len(commit.parents)} parents, not summarizing"
            )
            return merge_notice(sha)

        comparison = self.client.compare_commits(
            repository, base=commit.parents[0], head=sha
        )
        result = self._generate(repository, pr_number, commit, comparison)
        return from_completion(sha, result)

    def _generate(
        self,
        repository: Repository,
        pr_number: int,
        commit: CommitInfo,
        comparison: Dict[str, Any]
    ) -> CompletionResult:
        try:
            diff = fetch_diff(self.client, comparison)
        except Exception as e:
            self.logger.error(f"Failed to fetch diff for {commit.sha}: {e}")
            return CompletionResult.failure(f"diff fetch failed: {e}")

        result = self.generator.generate(diff.text)
        if not result.ok:
            self.logger.error(
                f"Failed to generate summary for {commit.sha}: {result.reason}"
            )
            return result

        files = diff.files or commit.files
        metadata = DiffMetadata(
            sha=commit.sha,
            pr_number=pr_number,
            repository=repository,
            anchors={path: diff_anchor(path) for path in files}
        )
        return CompletionResult.success(
            postprocess_summary(files, result.text, metadata)
        )

    def _log_tree(self, repository: Repository, commit: CommitInfo) -> None:
        if not commit.tree_sha or not self.logger.isEnabledFor(logging.DEBUG):
            return
        tree = self.client.get_tree(repository, commit.tree_sha)
        self.logger.debug(
            f"Tree {commit.tree_sha} of {commit.sha}: "
            f"{len(tree.get('tree', []))} entries"
        )

    def _post(
        self,
        repository: Repository,
        pr_number: int,
        comment: SummaryComment
    ) -> Optional[Dict[str, Any]]:
        body = format_comment(comment)
        if self.dry_run:
            self.logger.info(f"[dry run] Would comment on #{pr_number}:\n{body}")
            return None
        created = self.client.create_issue_comment(
            repository, pr_number, body, commit_id=comment.commit_sha
        )
        self.logger.info(f"Posted summary of {comment.commit_sha}")
        return created


def _outcome_for(comment: SummaryComment) -> CommitOutcome:
    if comment.kind == CommentKind.MERGE_NOTICE:
        return CommitOutcome.MERGE_SKIPPED
    if comment.kind == CommentKind.ERROR:
        return CommitOutcome.ERRORED
    return CommitOutcome.SUMMARIZED
