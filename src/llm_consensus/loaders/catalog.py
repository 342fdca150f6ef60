"""
Model catalog loader.

Parses the YAML catalog that maps provider kinds to model ids:

    openai:
      - gpt-5.2-2025-12-11
    anthropic:
      - claude-sonnet-4-5
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from llm_consensus.errors import ConfigurationError
from llm_consensus.models.catalog import ModelCatalog, ProviderKind
from llm_consensus.utils.paths import resolve_asset_path

DEFAULT_CATALOG_FILE = "catalog/models.yaml"


def parse_catalog(data: Any) -> ModelCatalog:
	"""
	Build a ModelCatalog from parsed YAML data.

	Parameters:
		data: Mapping of provider kind to a list of model ids.

	Returns:
		ModelCatalog with one entry per model.

	Raises:
		ConfigurationError: On unknown provider kinds or malformed data.
	"""
	if data is None:
		return ModelCatalog()
	if not isinstance(data, dict):
		raise ConfigurationError("model catalog must be a mapping")

	models: dict[str, ProviderKind] = {}
	for kind_name, entries in data.items():
		try:
			kind = ProviderKind(str(kind_name).lower())
		except ValueError:
			raise ConfigurationError(
			    f"unknown provider kind in catalog: {kind_name!r}") from None
		if not isinstance(entries, list):
			raise ConfigurationError(
			    f"catalog entry for {kind_name!r} must be a list of models")
		for model in entries:
			models[str(model).strip()] = kind
	return ModelCatalog(models=models)


def load_catalog(path: str | Path = DEFAULT_CATALOG_FILE) -> ModelCatalog:
	"""
	Load a model catalog from a YAML file.

	Supports absolute, cwd-relative, or package-relative paths.

	Raises:
		ConfigurationError: If the file is missing or invalid.
	"""
	p = resolve_asset_path(path)
	if not p.exists():
		raise ConfigurationError(f"model catalog not found at {path}")
	try:
		data = yaml.safe_load(p.read_text(encoding="utf-8"))
	except yaml.YAMLError as exc:
		raise ConfigurationError(f"invalid model catalog {p}: {exc}") from exc
	return parse_catalog(data)


__all__ = ["load_catalog", "parse_catalog", "DEFAULT_CATALOG_FILE"]
