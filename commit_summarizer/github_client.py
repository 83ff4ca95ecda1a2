"""GitHub API client for the endpoints the summary bot needs."""

import logging
import os
from typing import Any, Dict, Generator, List, Optional

import requests

from .models import CommitInfo, Repository


class GitHubClient:
    """Handles GitHub API interactions with pagination.

    Errors are not retried: any non-2xx response raises requests.HTTPError.
    """

    BASE_URL = "https://api.github.com"

    def __init__(self, token: Optional[str] = None):
        self.token = token or os.environ.get("GITHUB_TOKEN")
        if not self.token:
            raise ValueError("GITHUB_TOKEN environment variable required")
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28"
        })
        self.logger = logging.getLogger(__name__)

    def _request(
        self,
        method: str,
        url: str,
        **kwargs: Any
    ) -> requests.Response:
        """Make a request and raise on HTTP errors."""
        if not url.startswith("http"):
            url = f"{self.BASE_URL}{url}"

        self.logger.debug(f"{method} {url}")
        response = self.session.request(method, url, **kwargs)
        if not response.ok:
            self.logger.warning(
                f"Request failed ({response.status_code}): {method} {url}"
            )
        response.raise_for_status()
        return response

    def _paginate(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Generator[Dict[str, Any], None, None]:
        """Generator that handles pagination automatically."""
        params = params or {}
        params.setdefault("per_page", 100)

        while url:
            response = self._request("GET", url, params=params)

            data = response.json()
            if isinstance(data, list):
                yield from data
            else:
                yield data
                break

            url = None
            link_header = response.headers.get("Link", "")
            for link in link_header.split(","):
                if 'rel="next"' in link:
                    url = link.split(";")[0].strip("<> ")
                    params = {}
                    break

    def get_json(self, url: str) -> Dict[str, Any]:
        """GET an API resource by absolute or relative URL."""
        return self._request("GET", url).json()

    def get_text(self, url: str) -> str:
        """GET a plain text resource, e.g. a .diff URL."""
        return self._request("GET", url).text

    def list_issue_comments(
        self,
        repository: Repository,
        issue_number: int
    ) -> List[Dict[str, Any]]:
        """Get issue comments (general comments) for a PR."""
        url = f"/repos/{repository.full_name}/issues/{issue_number}/comments"
        return list(self._paginate(url))

    def list_pr_commits(
        self,
        repository: Repository,
        pr_number: int
    ) -> List[Dict[str, Any]]:
        """Get the commits of a PR in chronological order."""
        url = f"/repos/{repository.full_name}/pulls/{pr_number}/commits"
        return list(self._paginate(url))

    def get_commit(self, repository: Repository, sha: str) -> CommitInfo:
        """Get a single commit with its parents and changed files."""
        data = self.get_json(f"/repos/{repository.full_name}/commits/{sha}")
        files = data.get("files")
        if files is None:
            raise ValueError(f"Commit {sha} has no file list")
        return CommitInfo(
            sha=data["sha"],
            parents=[parent["sha"] for parent in data.get("parents", [])],
            files=[f["filename"] for f in files],
            tree_sha=data.get("commit", {}).get("tree", {}).get("sha")
        )

    def get_tree(self, repository: Repository, tree_sha: str) -> Dict[str, Any]:
        return self.get_json(f"/repos/{repository.full_name}/git/trees/{tree_sha}")

    def compare_commits(
        self,
        repository: Repository,
        base: str,
        head: str
    ) -> Dict[str, Any]:
        """Compare two commits; the result carries `url` and `diff_url`."""
        return self.get_json(
            f"/repos/{repository.full_name}/compare/{base}...{head}"
        )

    def create_issue_comment(
        self,
        repository: Repository,
        issue_number: int,
        body: str,
        commit_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Post a general comment on a PR."""
        payload: Dict[str, Any] = {"body": body}
        if commit_id:
            payload["commit_id"] = commit_id
        url = f"/repos/{repository.full_name}/issues/{issue_number}/comments"
        response = self._request("POST", url, json=payload)
        return response.json()
