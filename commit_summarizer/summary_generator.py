"""LLM-based summarization of git diffs."""

import logging
import os
from typing import Optional

import anthropic

from .constants import (
    DEFAULT_MODEL,
    DIFF_PREFIX,
    DIFF_SUFFIX,
    MAX_QUERY_LENGTH,
    MAX_TOKENS,
    SUMMARY_PRIMING,
    TEMPERATURE,
    TRUNCATION_MARKER,
)
from .models import CompletionResult


def build_prompt(
    raw_diff: str,
    priming: str = SUMMARY_PRIMING,
    max_length: int = MAX_QUERY_LENGTH
) -> str:
    """Wrap a diff in the priming instructions.

    Diffs that would push the prompt past max_length are cut and marked so
    the prompt always fits.

    Raises:
        ValueError: if max_length cannot hold the priming text, delimiters
            and truncation marker
    """
    overhead = len(priming) + len(DIFF_PREFIX) + len(DIFF_SUFFIX)
    if overhead + len(TRUNCATION_MARKER) > max_length:
        raise ValueError(
            f"max_length {max_length} is too small for the {overhead} char prompt frame"
        )
    budget = max_length - overhead
    if len(raw_diff) > budget:
        keep = budget - len(TRUNCATION_MARKER)
        logging.getLogger(__name__).warning(
            f"Diff of {len(raw_diff)} chars exceeds prompt budget, "
            f"truncating to {keep} chars"
        )
        raw_diff = raw_diff[:keep] + TRUNCATION_MARKER
    return f"{priming}{DIFF_PREFIX}{raw_diff}{DIFF_SUFFIX}"


class SummaryGenerator:
    """Summarizes commit diffs using Claude API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
        max_query_length: int = MAX_QUERY_LENGTH,
        client: Optional[anthropic.Anthropic] = None
    ):
        if client is None:
            self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
            if not self.api_key:
                raise ValueError("ANTHROPIC_API_KEY environment variable required")
            client = anthropic.Anthropic(api_key=self.api_key)

        # Fails fast on a limit too small to hold the prompt frame.
        build_prompt("", max_length=max_query_length)

        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_query_length = max_query_length
        self.logger = logging.getLogger(__name__)

    def generate(self, raw_diff: str) -> CompletionResult:
        """Summarize a raw diff into a bullet list.

        Never raises: API errors and empty responses come back as a failed
        CompletionResult carrying the reason.
        """
        prompt = build_prompt(raw_diff, max_length=self.max_query_length)
        self.logger.debug(f"Prompt ({len(prompt)} chars):\n{prompt}")

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}]
            )
        except Exception as e:
            self.logger.error(f"LLM API error: {e}")
            return CompletionResult.failure(f"API error: {e}")

        texts = [
            block.text for block in (response.content or [])
            if getattr(block, "type", None) == "text"
        ]
        if not texts or not texts[0].strip():
            self.logger.warning("LLM returned no completion text")
            return CompletionResult.failure("no completion choices")

        return CompletionResult.success(texts[0].strip())
