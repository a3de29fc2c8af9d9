"""Prompt templates for screenplay generation, loaded from YAML.

Templates live in ``config/prompts/prompts.yaml`` (or ``PROMPTS_PATH``),
grouped by section::

    version: "1.0"
    generation:
      scene:
        system: |
          You are a professional screenwriter...
        user: |
          SCENE: {scene_description}
          ...

Each entry is parsed once into a ``PromptTemplate`` so that a malformed
file fails at startup instead of on the first request.
"""

import logging
import string
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from api.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptTemplate:
    """A system prompt plus a user prompt with ``{placeholders}``."""

    system: str
    user: str

    @property
    def variables(self) -> frozenset[str]:
        """Placeholder names the user prompt expects."""
        return frozenset(
            field for _, field, _, _ in string.Formatter().parse(self.user) if field
        )

    def render(self, /, **kwargs: Any) -> str:
        missing = self.variables - kwargs.keys()
        if missing:
            raise KeyError(f"Missing prompt variables: {', '.join(sorted(missing))}")
        return self.user.format(**kwargs)


def _load_templates(raw: dict[str, Any], path: Path) -> dict[str, dict[str, PromptTemplate]]:
    templates: dict[str, dict[str, PromptTemplate]] = {}
    for section, entries in raw.items():
        if section == "version":
            continue
        if not isinstance(entries, dict):
            raise ValueError(f"Prompt section '{section}' in {path} must be a mapping")
        templates[section] = {}
        for name, entry in entries.items():
            if not isinstance(entry, dict) or "system" not in entry or "user" not in entry:
                raise ValueError(f"Prompt {section}.{name} in {path} needs 'system' and 'user'")
            templates[section][name] = PromptTemplate(
                system=str(entry["system"]).strip(),
                user=str(entry["user"]).strip(),
            )
    return templates


class PromptManager:
    """Look up and render prompt templates.

    Usage::

        pm = get_prompt_manager()
        system, user = pm.get("generation", "scene",
            scene_description="Margaret confronts the harbour master",
            characters="Character: Margaret",
            context="No specific context provided.",
        )
    """

    def __init__(self, yaml_path: Path | str | None = None) -> None:
        path = Path(yaml_path) if yaml_path else get_settings().prompts_path
        if not path.exists():
            raise FileNotFoundError(f"Prompt YAML not found: {path}")
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        self._version = str(raw.get("version", "unknown"))
        self._templates = _load_templates(raw, path)
        logger.info(
            "Loaded %d prompt templates (v%s) from %s",
            sum(len(entries) for entries in self._templates.values()),
            self._version,
            path,
        )

    @property
    def version(self) -> str:
        return self._version

    def template(self, section: str, name: str) -> PromptTemplate:
        """Return the template for ``section.name``.

        Raises ``KeyError`` if it does not exist.
        """
        try:
            return self._templates[section][name]
        except KeyError:
            raise KeyError(f"Prompt not found: {section}.{name}") from None

    def get(self, section: str, name: str, /, **kwargs: Any) -> tuple[str, str]:
        """Return ``(system_prompt, user_prompt)`` with variables substituted.

        Raises ``KeyError`` for an unknown prompt or a missing variable.
        """
        template = self.template(section, name)
        return template.system, template.render(**kwargs)

    def get_system(self, section: str, name: str) -> str:
        return self.template(section, name).system

    def sections(self) -> list[str]:
        return list(self._templates)


@lru_cache
def get_prompt_manager() -> PromptManager:
    """Return a cached ``PromptManager`` for the configured prompt file."""
    return PromptManager()
