"""
Tests for prompt construction and the completion call.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from commit_summarizer.constants import DIFF_PREFIX, DIFF_SUFFIX, SUMMARY_PRIMING, TRUNCATION_MARKER
from commit_summarizer.summary_generator import SummaryGenerator, build_prompt


def text_block(text):
    return SimpleNamespace(type="text", text=text)


@pytest.fixture
def llm():
    client = MagicMock()
    client.messages.create.return_value = SimpleNamespace(
        content=[text_block("* Added a feature [app.py]\n")]
    )
    return client


def test_build_prompt_wraps_diff_in_delimiters():
    prompt = build_prompt("+new line")

    assert prompt == f"{SUMMARY_PRIMING}{DIFF_PREFIX}+new line{DIFF_SUFFIX}"
    assert "THE GIT DIFF TO BE SUMMARIZED:\n```\n+new line\n```" in prompt


def test_build_prompt_truncates_oversized_diff():
    max_length = len(SUMMARY_PRIMING) + len(DIFF_PREFIX) + len(DIFF_SUFFIX) + 100

    prompt = build_prompt("x" * 1000, max_length=max_length)

    assert len(prompt) == max_length
    assert TRUNCATION_MARKER + DIFF_SUFFIX in prompt


def test_generate_sends_fixed_parameters(llm):
    generator = SummaryGenerator(client=llm, model="test-model", temperature=0.5, max_tokens=4096)

    result = generator.generate("+new line")

    assert result.ok
    assert result.text == "* Added a feature [app.py]"
    kwargs = llm.messages.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["temperature"] == 0.5
    assert kwargs["max_tokens"] == 4096
    assert kwargs["messages"][0]["content"].endswith("+new line" + DIFF_SUFFIX)


def test_generate_empty_response_is_failure(llm):
    llm.messages.create.return_value = SimpleNamespace(content=[])

    result = SummaryGenerator(client=llm).generate("+x")

    assert not result.ok
    assert result.reason == "no completion choices"


def test_generate_api_error_is_failure(llm):
    llm.messages.create.side_effect = RuntimeError("overloaded")

    result = SummaryGenerator(client=llm).generate("+x")

    assert not result.ok
    assert "overloaded" in result.reason


def test_requires_api_key(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    with pytest.raises(ValueError):
        SummaryGenerator()


def test_build_prompt_rejects_limit_smaller_than_frame():
    frame = len(SUMMARY_PRIMING) + len(DIFF_PREFIX) + len(DIFF_SUFFIX)

    with pytest.raises(ValueError):
        build_prompt("x" * 10, max_length=frame)


def test_generator_rejects_unusable_query_length(llm):
    with pytest.raises(ValueError):
        SummaryGenerator(client=llm, max_query_length=100)


def test_priming_describes_diff_lines_in_order():
    removed = SUMMARY_PRIMING.index("A line that starting with `-` means that line was deleted.")
    added = SUMMARY_PRIMING.index("A line starting with `+` means it was added.")

    assert "Then there is a specifier of the lines that were modified.\nThen there are lines.\n" in SUMMARY_PRIMING
    assert removed < added
