"""
Tests for the command line entry point and its exit contract.
"""

import json
from unittest.mock import patch

import pytest

from commit_summarizer import main as main_module
from commit_summarizer.config import SummarizerConfig


def test_missing_repository_exits_nonzero_without_clients(tmp_path, monkeypatch):
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps({"pull_request": {"number": 5}}))
    monkeypatch.setenv("GITHUB_TOKEN", "t")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "k")

    with patch.object(main_module, "GitHubClient") as mock_client:
        with pytest.raises(SystemExit) as exc:
            main_module.main(["--event-path", str(event_file)])

    assert exc.value.code == 1
    mock_client.assert_not_called()


def test_run_wires_config_into_processor(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "t")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "k")
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)
    monkeypatch.delenv("SUMMARY_MAX_COMMITS", raising=False)

    with patch.object(main_module, "GitHubClient") as mock_client, \
            patch.object(main_module, "SummaryGenerator") as mock_generator, \
            patch.object(main_module, "CommitProcessor") as mock_processor:
        main_module.main(["--repo", "octo/widgets", "--pr", "9", "--max-commits", "2", "--dry-run"])

    mock_client.assert_called_once_with("t")
    assert mock_generator.call_args.kwargs["api_key"] == "k"
    _, kwargs = mock_processor.call_args
    assert kwargs == {"max_commits": 2, "dry_run": True}
    context = mock_processor.return_value.run.call_args.args[0]
    assert context.pr_number == 9
    assert context.repository.full_name == "octo/widgets"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SUMMARY_MODEL", "my-model")
    monkeypatch.setenv("SUMMARY_MAX_COMMITS", "3")

    config = SummarizerConfig.from_env()

    assert config.model == "my-model"
    assert config.max_commits == 3
    assert config.max_query_length == 160000


def test_config_rejects_bad_max_commits(monkeypatch):
    monkeypatch.setenv("SUMMARY_MAX_COMMITS", "lots")

    with pytest.raises(ValueError):
        SummarizerConfig.from_env()


def test_config_blank_max_commits_uses_default(monkeypatch):
    monkeypatch.setenv("SUMMARY_MAX_COMMITS", "")

    config = SummarizerConfig.from_env()

    assert config.max_commits == 5


@pytest.mark.parametrize("value", ["0", "-2"])
def test_config_rejects_non_positive_max_commits(monkeypatch, value):
    monkeypatch.setenv("SUMMARY_MAX_COMMITS", value)

    with pytest.raises(ValueError):
        SummarizerConfig.from_env()


def test_cli_rejects_zero_max_commits():
    with pytest.raises(SystemExit) as exc:
        main_module.build_parser().parse_args(["--max-commits", "0"])

    assert exc.value.code == 2
