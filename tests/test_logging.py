"""Tests for the logging module: API key sanitization."""

from __future__ import annotations

import logging

import pytest

from llm_consensus.utils.logging import (
    sanitize_text,
    SecretSanitizingFilter,
    configure_logging,
    get_logger,
)


class TestSanitizeText:
	"""Tests for sanitize_text()."""

	def test_masks_openai_key(self) -> None:
		"""sk- style keys are replaced."""
		result = sanitize_text("auth failed for sk-proj-abcdef123456")
		assert "abcdef123456" not in result
		assert "sk-***" in result

	def test_masks_anthropic_key(self) -> None:
		result = sanitize_text("key sk-ant-REDACTED rejected")
		assert "XYZxyz0987654321" not in result
		assert "rejected" in result

	def test_masks_google_key(self) -> None:
		key = "AIza" + "b" * 35
		result = sanitize_text(f"using {key}")
		assert key not in result
		assert "AIza***" in result

	def test_masks_key_query_parameter(self) -> None:
		url = "https://example.test/v1/models?key=secret123&alt=sse"
		result = sanitize_text(url)
		assert "secret123" not in result
		assert "?key=***" in result
		assert "&alt=sse" in result

	@pytest.mark.parametrize(
	    "text, secret",
	    [
	        ("x-api-key: abc123secret", "abc123secret"),
	        ("Authorization: Bearer tok3n-value", "tok3n-value"),
	        ("{'x-goog-api-key': 'gkey999'}", "gkey999"),
	    ],
	)
	def test_masks_headers(self, text: str, secret: str) -> None:
		assert secret not in sanitize_text(text)

	def test_no_change_without_secret(self) -> None:
		"""Plain text passes through unchanged."""
		text = "model gpt-5.2-2025-12-11 completed in 1.2s"
		assert sanitize_text(text) == text


class TestSecretSanitizingFilter:
	"""Tests for SecretSanitizingFilter."""

	def test_filters_msg_and_args(self) -> None:
		record = logging.LogRecord(
		    name="t",
		    level=logging.WARNING,
		    pathname=__file__,
		    lineno=1,
		    msg="request with sk-abcdefghijkl failed: %s",
		    args=("x-api-key: topsecret", 3),
		    exc_info=None,
		)
		assert SecretSanitizingFilter().filter(record) is True
		message = record.getMessage()
		assert "abcdefghijkl" not in message
		assert "topsecret" not in message

	def test_filters_dict_args(self) -> None:
		record = logging.LogRecord("t", logging.INFO, __file__, 1,
		                           "%(k)s", None, None)
		record.args = {"k": "sk-1234567890ab"}
		SecretSanitizingFilter().filter(record)
		assert record.args == {"k": "sk-***"}


def test_configure_logging_installs_single_filter() -> None:
	root = logging.getLogger()
	configure_logging("debug")
	configure_logging("info")
	filters = [f for f in root.filters if isinstance(f, SecretSanitizingFilter)]
	assert len(filters) == 1
	for f in filters:
		root.removeFilter(f)


def test_configure_logging_unknown_level_falls_back() -> None:
	configure_logging("not-a-level")
	for f in list(logging.getLogger().filters):
		if isinstance(f, SecretSanitizingFilter):
			logging.getLogger().removeFilter(f)


def test_get_logger_name() -> None:
	assert get_logger("llm_consensus.x").name == "llm_consensus.x"
