"""Tests for the screenplay generation service."""

import json

import pytest

from core.exceptions import LLMException, PromptException
from core.models import FormattedScript
from llm.prompt_manager import PromptManager
from screenplay import format_document
from services.script_generator import ScriptGenerator


def _sent_prompt(provider) -> str:
    return provider.generate.call_args.args[0]


class TestGenerateScreenplay:
    """Tests for ScriptGenerator.generate_screenplay."""

    @pytest.mark.asyncio
    async def test_returns_raw_and_formatted(self, generator, mock_provider, sample_screenplay):
        mock_provider.generate.return_value = sample_screenplay

        result = await generator.generate_screenplay({"title": "Tide"})

        assert isinstance(result, FormattedScript)
        assert result.raw == sample_screenplay
        assert result.formatted == format_document(sample_screenplay)
        assert result.formatted.startswith("INT. KITCHEN - NIGHT")

    @pytest.mark.asyncio
    async def test_prompt_contents(self, generator, mock_provider):
        characters = [{"name": "Ada", "description": "A diver", "role": "Lead"}]
        await generator.generate_screenplay(
            {"title": "Tide"}, characters=characters, structure="Five acts"
        )

        prompt = _sent_prompt(mock_provider)
        assert '"title": "Tide"' in prompt
        assert "Character: Ada" in prompt
        assert "Role: Lead" in prompt
        assert "Traits: Not specified" in prompt
        assert "STRUCTURE: Five acts" in prompt

        kwargs = mock_provider.generate.call_args.kwargs
        assert kwargs["temperature"] == 0.5
        assert kwargs["max_tokens"] == 8000
        assert "professional screenwriter" in kwargs["system_prompt"]

    @pytest.mark.asyncio
    async def test_prompt_defaults(self, generator, mock_provider):
        await generator.generate_screenplay("A heist on a ferry")

        prompt = _sent_prompt(mock_provider)
        assert "A heist on a ferry" in prompt
        assert "Develop characters based on the concept." in prompt
        assert "Standard three-act structure" in prompt

    @pytest.mark.asyncio
    async def test_dialogue_detection_applied(self, mock_provider, prompt_manager):
        mock_provider.generate.return_value = "JOHN\nHello there, how are you doing today my friend?"
        generator = ScriptGenerator(mock_provider, prompt_manager, detect_dialogue=True)

        result = await generator.generate_screenplay("Anything")

        assert result.formatted == "JOHN\nHello there, how are you doing\ntoday my friend?"

    @pytest.mark.asyncio
    async def test_empty_response_raises(self, generator, mock_provider):
        mock_provider.generate.return_value = "   "

        with pytest.raises(LLMException, match="empty response"):
            await generator.generate_screenplay("Anything")

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(self, generator, mock_provider):
        mock_provider.generate.side_effect = LLMException("down", details={"provider": "mock"})

        with pytest.raises(LLMException, match="down"):
            await generator.generate_screenplay("Anything")


class TestGenerateScene:
    """Tests for ScriptGenerator.generate_scene."""

    @pytest.mark.asyncio
    async def test_formats_scene(self, generator, mock_provider):
        result = await generator.generate_scene("John greets Mary")

        assert result.raw == "INT. OFFICE - DAY\n\nJOHN\nHello."
        assert result.formatted == "INT. OFFICE - DAY\n\nJOHN\nHello."

    @pytest.mark.asyncio
    async def test_prompt_contents(self, generator, mock_provider):
        await generator.generate_scene(
            "John greets Mary",
            characters=[{"name": "John", "description": "Clerk", "role": "Lead"}, "Mary"],
            context={"previous_scene": "The storm"},
        )

        prompt = _sent_prompt(mock_provider)
        assert "SCENE: John greets Mary" in prompt
        assert "Character: John" in prompt
        assert "Character: Mary" in prompt
        assert "Role:" not in prompt
        assert '"previous_scene": "The storm"' in prompt
        assert mock_provider.generate.call_args.kwargs["temperature"] == 0.6

    @pytest.mark.asyncio
    async def test_prompt_defaults(self, generator, mock_provider):
        await generator.generate_scene("John greets Mary")

        prompt = _sent_prompt(mock_provider)
        assert "No specific character details provided." in prompt
        assert "No specific context provided." in prompt


class TestGenerateConcept:
    """Tests for ScriptGenerator.generate_concept."""

    @pytest.mark.asyncio
    async def test_json_response_is_parsed(self, generator, mock_provider):
        concept = {"title": "Tide", "logline": "A diver returns home."}
        mock_provider.generate.return_value = json.dumps(concept)

        assert await generator.generate_concept("A diver returns home") == concept

    @pytest.mark.asyncio
    async def test_text_response_is_wrapped(self, generator, mock_provider):
        mock_provider.generate.return_value = "TIDE: a story about returning."

        result = await generator.generate_concept(
            "A diver returns home", genre="Drama", themes=["Home", "Grief"]
        )

        assert result == {
            "premise": "A diver returns home",
            "expanded": "TIDE: a story about returning.",
            "genre": "Drama",
            "themes": ["Home", "Grief"],
            "length": None,
        }

    @pytest.mark.asyncio
    async def test_prompt_contents(self, generator, mock_provider):
        await generator.generate_concept("A diver returns home", themes=["Home", "Grief"])

        prompt = _sent_prompt(mock_provider)
        assert "PREMISE: A diver returns home" in prompt
        assert "GENRE: Not specified" in prompt
        assert "THEMES: Home, Grief" in prompt
        assert "Feature film (approximately 90-120 minutes)" in prompt
        assert mock_provider.generate.call_args.kwargs["max_tokens"] == 2000


class TestAnalyzeScreenplay:
    """Tests for ScriptGenerator.analyze_screenplay."""

    @pytest.mark.asyncio
    async def test_text_analysis_is_wrapped(self, generator, mock_provider):
        mock_provider.generate.return_value = "Strong opening, weak second act."

        result = await generator.analyze_screenplay("INT. HOUSE - DAY")

        assert result == {"analysis": "Strong opening, weak second act."}
        assert mock_provider.generate.call_args.kwargs["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_json_analysis_is_parsed(self, generator, mock_provider):
        mock_provider.generate.return_value = '{"pacing": "slow"}'

        assert await generator.analyze_screenplay("INT. HOUSE - DAY") == {"pacing": "slow"}

    @pytest.mark.asyncio
    async def test_json_list_is_not_treated_as_object(self, generator, mock_provider):
        mock_provider.generate.return_value = '["note"]'

        assert await generator.analyze_screenplay("INT. HOUSE - DAY") == {"analysis": '["note"]'}


class TestPromptErrors:
    """Prompt problems surface as PromptException."""

    @pytest.mark.asyncio
    async def test_missing_template(self, mock_provider, tmp_path):
        path = tmp_path / "prompts.yaml"
        path.write_text('version: "1"\n', encoding="utf-8")
        generator = ScriptGenerator(mock_provider, PromptManager(path))

        with pytest.raises(PromptException, match="generation.scene"):
            await generator.generate_scene("Anything")

        mock_provider.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_variables_named_like_lookup_arguments(self, mock_provider, tmp_path):
        path = tmp_path / "prompts.yaml"
        path.write_text(
            'cards:\n  intro:\n    system: "sys"\n    user: "{name} opens {section}"\n',
            encoding="utf-8",
        )
        generator = ScriptGenerator(mock_provider, PromptManager(path))

        await generator._complete("cards", "intro", (0.1, 10), name="Ada", section="act one")

        assert _sent_prompt(mock_provider) == "Ada opens act one"
        assert mock_provider.generate.call_args.kwargs["system_prompt"] == "sys"
