"""
Logging configuration module.

Provides centralized logging setup for the application with
configurable log levels, consistent formatting and API key masking.
"""

from __future__ import annotations

import logging
import re

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# (pattern, replacement) pairs applied in order.
_SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # OpenAI / Anthropic style keys: sk-..., sk-ant-...
    (re.compile(r"\bsk-[A-Za-z0-9_-]{8,}"), "sk-***"),
    # Google API keys
    (re.compile(r"\bAIza[0-9A-Za-z_-]{20,}"), "AIza***"),
    # ?key=... query parameters
    (re.compile(r"([?&]key=)[^&\s\"']+", re.IGNORECASE), r"\1***"),
    # header values
    (
        re.compile(
            r"((?:x-api-key|x-goog-api-key|authorization)[\"']?\s*[:=]\s*"
            r"[\"']?(?:Bearer\s+)?)[^\s\"',}]+",
            re.IGNORECASE,
        ),
        r"\1***",
    ),
]


def sanitize_text(text: str) -> str:
	"""Mask API keys in text.

	Parameters:
		text: Raw text that may contain credentials.

	Returns:
		Text with key material replaced by ``***``.
	"""
	for pattern, repl in _SECRET_PATTERNS:
		text = pattern.sub(repl, text)
	return text


class SecretSanitizingFilter(logging.Filter):
	"""Logging filter that redacts API keys from log records.

	Applied to the root logger so every handler benefits from
	key masking without call-site awareness.
	"""

	def filter(self, record: logging.LogRecord) -> bool:
		"""Sanitize the log record message and args."""
		if isinstance(record.msg, str):
			record.msg = sanitize_text(record.msg)
		if record.args:
			if isinstance(record.args, dict):
				record.args = {
				    k: sanitize_text(v) if isinstance(v, str) else v
				    for k, v in record.args.items()
				}
			elif isinstance(record.args, tuple):
				record.args = tuple(
				    sanitize_text(a) if isinstance(a, str) else a
				    for a in record.args)
		return True


def configure_logging(level: str = "warning") -> None:
	"""
	Configure basic logging with level, format, and key sanitization.

	Parameters:
		level: Log level string (e.g., "info", "debug", "warning").
	"""
	lvl = logging.getLevelName(level.upper())
	if not isinstance(lvl, int):
		lvl = logging.WARNING
	logging.basicConfig(level=lvl, format=LOG_FORMAT)
	root = logging.getLogger()
	if not any(isinstance(f, SecretSanitizingFilter) for f in root.filters):
		root.addFilter(SecretSanitizingFilter())


def get_logger(name: str) -> logging.Logger:
	"""
	Get a logger for the specified module.

	Parameters:
		name: The logger name, typically __name__.

	Returns:
		Configured logger instance.
	"""
	return logging.getLogger(name)


__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_text",
    "SecretSanitizingFilter",
]
