"""
Run parameters model.

Defines validated run parameters for CLI invocation and pipeline
orchestration.
"""

from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_core.core_schema import ValidationInfo


class RunParams(BaseModel):
	"""Validated run parameters for CLI/pipeline.

	``models`` accepts a comma-separated string or a list; entries are
	stripped and must be non-empty. Unset overrides stay None so that
	environment-based configuration wins.
	"""

	prompt: str = Field(description="Prompt sent to every model")
	models: list[str] = Field(description="Models to query, in order")
	judge: Optional[str] = Field(default=None,
	                             description="Override judge model")
	timeout: Optional[int] = Field(default=None,
	                               description="Per-model timeout seconds")
	judge_timeout: Optional[int] = Field(default=None,
	                                     description="Judge timeout seconds")
	output: Optional[str] = Field(default=None,
	                              description="Explicit JSON output path")
	data_dir: Optional[str] = Field(default=None,
	                                description="Auto-save directory")
	quiet: bool = Field(default=False, description="Suppress progress")
	json_output: bool = Field(default=False,
	                          description="JSON to stdout, no auto-save")
	no_save: bool = Field(default=False, description="Disable auto-save")

	@field_validator("prompt")
	@classmethod
	def validate_prompt(cls, v: str) -> str:
		if not v.strip():
			raise ValueError("prompt must not be empty")
		return v

	@field_validator("models", mode="before")
	@classmethod
	def split_models(cls, v: Any) -> list[str]:
		"""Normalize models to a list regardless of input format."""
		if v is None:
			return []
		if isinstance(v, str):
			v = v.split(",")
		return [str(m).strip() for m in v]

	@field_validator("models")
	@classmethod
	def validate_models(cls, v: list[str]) -> list[str]:
		if not v:
			raise ValueError("at least one model is required")
		if any(not m for m in v):
			raise ValueError("model names must not be empty")
		return v

	@field_validator("timeout", "judge_timeout")
	@classmethod
	def validate_positive(cls, v: Optional[int],
	                      info: ValidationInfo) -> Optional[int]:
		if v is None:
			return v
		if v <= 0:
			raise ValueError(f"{info.field_name} must be > 0")
		return v

	@property
	def auto_save(self) -> bool:
		"""True when the run should be saved to the data directory."""
		return not self.output and not self.json_output and not self.no_save


__all__ = ["RunParams"]
