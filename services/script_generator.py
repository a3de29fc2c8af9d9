"""Screenplay generation service.

Builds prompts from YAML templates, calls the configured LLM provider and
passes screenplay output through the formatting engine.  Nothing is
persisted: callers receive ``FormattedScript`` pairs of raw and formatted
text and decide what to store.
"""

import json
import logging
from typing import Any

from core.exceptions import LLMException, PromptException
from core.models import FormattedScript
from llm.base import BaseLLMProvider
from llm.prompt_manager import PromptManager
from screenplay import format_document

logger = logging.getLogger(__name__)

_DEFAULT_LENGTH = "Feature film (approximately 90-120 minutes)"
_DEFAULT_STRUCTURE = "Standard three-act structure"
_NOT_SPECIFIED = "Not specified"

# (temperature, max_tokens) per task
_CONCEPT_SAMPLING = (0.7, 2000)
_SCREENPLAY_SAMPLING = (0.5, 8000)
_SCENE_SAMPLING = (0.6, 2000)
_ANALYSIS_SAMPLING = (0.2, 3000)


def _to_text(value: Any) -> str:
    """Render a dict/list payload as indented JSON, strings as-is."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False)
    return str(value)


def _describe_characters(characters: list[Any], *, include_role: bool) -> str:
    """Render character details as labelled paragraphs for the prompt."""
    entries: list[str] = []
    for character in characters:
        if not isinstance(character, dict):
            entries.append(f"Character: {character}")
            continue
        lines = [
            f"Character: {character.get('name', 'Unnamed')}",
            f"Description: {character.get('description', _NOT_SPECIFIED)}",
        ]
        if include_role:
            lines.append(f"Role: {character.get('role', _NOT_SPECIFIED)}")
        lines.append(f"Traits: {character.get('traits') or _NOT_SPECIFIED}")
        entries.append("\n".join(lines))
    return "\n\n".join(entries)


def _parse_json_object(response: str) -> dict[str, Any] | None:
    """Return *response* parsed as a JSON object, or None if it is not one."""
    try:
        parsed = json.loads(response)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


class ScriptGenerator:
    """Generate concepts, screenplays and scenes with an LLM provider."""

    def __init__(
        self,
        provider: BaseLLMProvider,
        prompt_manager: PromptManager,
        detect_dialogue: bool = False,
    ) -> None:
        self.provider = provider
        self.prompts = prompt_manager
        self.detect_dialogue = detect_dialogue

    def _prompt(self, section: str, name: str, /, **kwargs: Any) -> tuple[str, str]:
        try:
            return self.prompts.get(section, name, **kwargs)
        except (KeyError, IndexError, ValueError) as e:
            raise PromptException(
                f"Cannot render prompt {section}.{name}",
                details={"section": section, "name": name, "error": str(e)},
            ) from e

    async def _complete(
        self, section: str, name: str, sampling: tuple[float, int], /, **kwargs: Any
    ) -> str:
        system, user = self._prompt(section, name, **kwargs)
        temperature, max_tokens = sampling

        logger.info(
            "Requesting %s.%s from %s", section, name, self.provider.provider_name
        )
        response = await self.provider.generate(
            user,
            system_prompt=system,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not response or not response.strip():
            raise LLMException(
                f"Provider returned an empty response for {section}.{name}",
                details={"provider": self.provider.provider_name},
            )
        return response

    def _format(self, raw: str) -> FormattedScript:
        return FormattedScript(
            raw=raw,
            formatted=format_document(raw, detect_dialogue=self.detect_dialogue),
        )

    async def generate_concept(
        self,
        premise: str,
        genre: str | None = None,
        themes: list[str] | str | None = None,
        length: str | None = None,
    ) -> dict[str, Any]:
        """Expand a premise into a concept.

        JSON object responses are returned as parsed; anything else is
        wrapped together with the request parameters.
        """
        themes_text = ", ".join(themes) if isinstance(themes, list) else themes
        response = await self._complete(
            "generation",
            "concept",
            _CONCEPT_SAMPLING,
            premise=premise,
            genre=genre or _NOT_SPECIFIED,
            themes=themes_text or _NOT_SPECIFIED,
            length=length or _DEFAULT_LENGTH,
        )

        parsed = _parse_json_object(response)
        if parsed is not None:
            return parsed
        return {
            "premise": premise,
            "expanded": response,
            "genre": genre,
            "themes": themes,
            "length": length,
        }

    async def generate_screenplay(
        self,
        concept: dict[str, Any] | str,
        characters: list[Any] | None = None,
        structure: str | None = None,
    ) -> FormattedScript:
        """Write a full screenplay from a concept and format it."""
        characters_text = (
            _describe_characters(characters, include_role=True)
            if characters
            else "Develop characters based on the concept."
        )
        raw = await self._complete(
            "generation",
            "screenplay",
            _SCREENPLAY_SAMPLING,
            concept=_to_text(concept),
            characters=characters_text,
            structure=structure or _DEFAULT_STRUCTURE,
        )
        return self._format(raw)

    async def generate_scene(
        self,
        scene_description: str,
        characters: list[Any] | None = None,
        context: dict[str, Any] | str | None = None,
    ) -> FormattedScript:
        """Write a single scene and format it."""
        characters_text = (
            _describe_characters(characters, include_role=False)
            if characters
            else "No specific character details provided."
        )
        raw = await self._complete(
            "generation",
            "scene",
            _SCENE_SAMPLING,
            scene_description=scene_description,
            characters=characters_text,
            context=_to_text(context) if context else "No specific context provided.",
        )
        return self._format(raw)

    async def analyze_screenplay(self, screenplay: str) -> dict[str, Any]:
        """Ask the provider for notes on *screenplay*."""
        response = await self._complete(
            "analysis", "screenplay", _ANALYSIS_SAMPLING, screenplay=screenplay
        )
        parsed = _parse_json_object(response)
        return parsed if parsed is not None else {"analysis": response}
