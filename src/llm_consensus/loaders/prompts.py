"""
Judge prompt template loading.

The judge synthesis prompt ships as markdown under the package's
``prompts/`` directory. It carries ``$prompt`` and ``$responses``
placeholders, rendered with ``string.Template.safe_substitute`` so a
literal dollar sign in a model answer passes through untouched.
"""

from __future__ import annotations

from pathlib import Path
from string import Template

PROMPTS_DIR = Path(__file__).resolve().parents[1] / "prompts"
JUDGE_TEMPLATE_FILE = "judge_synthesis.md"


def load_prompt(name: str) -> str:
	"""
	Read a bundled prompt file.

	Parameters:
		name: Filename under ``PROMPTS_DIR``.

	Returns:
		Raw template text.

	Raises:
		FileNotFoundError: If the package ships no such prompt.
	"""
	return (PROMPTS_DIR / name).read_text(encoding="utf-8")


def load_judge_template() -> Template:
	"""Return the judge synthesis prompt as a ``string.Template``."""
	return Template(load_prompt(JUDGE_TEMPLATE_FILE))


__all__ = [
    "load_prompt",
    "load_judge_template",
    "PROMPTS_DIR",
    "JUDGE_TEMPLATE_FILE",
]
