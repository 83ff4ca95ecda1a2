import json

import pytest

from commit_summarizer.event_context import (
    RepositoryContextError,
    load_event_payload,
    resolve_context,
)
from commit_summarizer.models import Repository


PAYLOAD = {
    "pull_request": {"number": 12},
    "repository": {"name": "widgets", "owner": {"login": "octo"}},
}


def test_load_event_payload_from_env(tmp_path, monkeypatch):
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps(PAYLOAD))
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_file))

    assert load_event_payload() == PAYLOAD


def test_load_event_payload_without_path(monkeypatch):
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)

    assert load_event_payload() == {}


def test_resolve_context_from_payload():
    context = resolve_context(PAYLOAD)

    assert context.pr_number == 12
    assert context.require_repository() == Repository(owner="octo", name="widgets")


def test_command_line_overrides_payload():
    context = resolve_context(PAYLOAD, repo="other/thing", pr_number=3)

    assert context.pr_number == 3
    assert context.require_repository().full_name == "other/thing"


def test_missing_repository_is_fatal():
    context = resolve_context({"pull_request": {"number": 12}})

    with pytest.raises(RepositoryContextError, match="Repository undefined"):
        context.require_repository()


def test_missing_pull_request_is_fatal():
    with pytest.raises(RepositoryContextError):
        resolve_context({"repository": PAYLOAD["repository"]})


def test_malformed_repo_argument():
    with pytest.raises(RepositoryContextError):
        resolve_context(PAYLOAD, repo="no-slash")
