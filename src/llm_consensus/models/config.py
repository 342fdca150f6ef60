from __future__ import annotations

from pathlib import Path
from typing import Any, TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

if TYPE_CHECKING:
	from llm_consensus.models.run_params import RunParams

DEFAULT_JUDGE = "gpt-5.2-pro-2025-12-11"


def load_env(env_file: str | Path | None = None) -> None:
	"""Load environment variables from an `.env` file if present."""
	env_path = Path(env_file) if env_file else Path(".env")
	if env_path.exists():
		load_dotenv(env_path)


class Config(BaseSettings):
	"""Runtime configuration loaded from environment variables."""

	model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

	judge: str = Field(
	    DEFAULT_JUDGE,
	    alias="CONSENSUS_JUDGE",
	    description="Model used for consensus synthesis",
	)
	timeout_seconds: int = Field(
	    120,
	    alias="CONSENSUS_TIMEOUT_SECONDS",
	    description="Per-model query timeout in seconds",
	)
	judge_timeout_seconds: int = Field(
	    300,
	    alias="JUDGE_TIMEOUT_SECONDS",
	    description="Judge synthesis timeout in seconds",
	)
	data_dir: str = Field("data", alias="CONSENSUS_DATA_DIR",
	                      description="Directory for auto-saved runs")
	catalog_file: str = Field(
	    "catalog/models.yaml",
	    alias="CONSENSUS_CATALOG_FILE",
	    description="Model catalog path (absolute, cwd- or package-relative)",
	)
	log_level: str = Field("warning", alias="LOG_LEVEL",
	                       description="Log level")
	max_output_tokens: int = Field(
	    4096,
	    alias="MAX_OUTPUT_TOKENS",
	    description="Output token limit for providers that require one",
	)
	openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
	anthropic_api_key: str | None = Field(default=None,
	                                      alias="ANTHROPIC_API_KEY")
	google_api_key: str | None = Field(default=None, alias="GOOGLE_API_KEY")
	openai_base_url: str | None = Field(
	    default=None,
	    alias="OPENAI_BASE_URL",
	    description="Custom OpenAI base URL (proxies, compatible APIs)",
	)
	anthropic_base_url: str | None = Field(
	    default=None,
	    alias="ANTHROPIC_BASE_URL",
	    description="Custom Anthropic base URL",
	)

	@field_validator("timeout_seconds", "judge_timeout_seconds",
	                 "max_output_tokens")
	@classmethod
	def validate_positive(cls, v: Any, info: ValidationInfo) -> Any:
		if v is not None and int(v) <= 0:
			raise ValueError(f"{info.field_name} must be > 0")
		return v

	@property
	def data_path(self) -> Path:
		"""Return data_dir as Path."""
		return Path(self.data_dir)

	def apply_overrides(self, run_params: "RunParams") -> None:
		"""Apply CLI overrides from RunParams onto this config.

		Only non-None fields in run_params are applied, preserving
		environment-based defaults for anything the user didn't set.

		Parameters:
			run_params: Validated run parameters with optional overrides.
		"""
		_OVERRIDES: list[tuple[str, str]] = [
		    ("judge", "judge"),
		    ("timeout", "timeout_seconds"),
		    ("judge_timeout", "judge_timeout_seconds"),
		    ("data_dir", "data_dir"),
		]
		for param_field, config_field in _OVERRIDES:
			value = getattr(run_params, param_field)
			if value is not None:
				setattr(self, config_field, value)


__all__ = ["Config", "load_env", "DEFAULT_JUDGE"]
