"""
Path utilities.

Resolves package-relative asset paths (catalog, prompts) and keeps
run directories inside the configured data directory.
"""

from __future__ import annotations

from pathlib import Path

# Root of the llm_consensus package directory.
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent


def resolve_asset_path(relative_path: str | Path) -> Path:
	"""Resolve a path that may be relative to the package directory.

	Resolution order:
	1. If the path exists as-is (absolute or cwd-relative), return it.
	2. Otherwise, resolve against the package directory.

	Parameters:
		relative_path: Path string such as ``catalog/models.yaml``.

	Returns:
		Resolved Path to the asset.
	"""
	p = Path(relative_path)
	if p.exists():
		return p
	return PACKAGE_DIR / p


def ensure_within(base: Path, path: Path) -> Path:
	"""
	Ensure a path is within the specified base directory.

	Raises:
		ValueError: If path escapes the base directory.
	"""
	resolved_base = base.resolve()
	resolved_path = path.resolve()
	if resolved_path == resolved_base or resolved_path.is_relative_to(
	    resolved_base):
		return path
	raise ValueError(f"Path {resolved_path} escapes base {resolved_base}")


__all__ = ["ensure_within", "resolve_asset_path", "PACKAGE_DIR"]
