"""Screenplay formatting and generation endpoints.

Formatting endpoints are pure text transformations and need no LLM.
Generation endpoints call the configured provider and return raw output
alongside its formatted rendition; storing either is up to the caller.
"""

import logging

from fastapi import APIRouter, Depends, status

from api.config import Settings
from api.dependencies import get_script_generator, get_settings_dependency
from core.exceptions import ValidationException
from core.models import (
    AnalysisResponse,
    AnalyzeRequest,
    ConceptResponse,
    FixRequest,
    FixResponse,
    FormatRequest,
    FormatResponse,
    GenerateConceptRequest,
    GenerateSceneRequest,
    GenerateScreenplayRequest,
    SceneResponse,
    ScreenplayResponse,
    ValidateRequest,
    ValidationResult,
)
from screenplay import fix_format_issues, format_script, validate_format
from screenplay.document import count_elements
from services.script_generator import ScriptGenerator

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_size(text: str, settings: Settings) -> None:
    if len(text) > settings.max_input_chars:
        raise ValidationException(
            f"Text exceeds maximum length of {settings.max_input_chars} characters",
            details={"length": len(text), "max_length": settings.max_input_chars},
        )


def _format(request: FormatRequest, settings: Settings) -> FormatResponse:
    _check_size(request.text, settings)
    detect_dialogue = (
        settings.detect_dialogue if request.detect_dialogue is None else request.detect_dialogue
    )
    formatted, elements = format_script(request.text, detect_dialogue=detect_dialogue)
    return FormatResponse(
        raw=request.text,
        formatted=formatted,
        elements=count_elements(elements),
    )


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


@router.post(
    "/format",
    response_model=FormatResponse,
    status_code=status.HTTP_200_OK,
    summary="Format a screenplay",
)
async def format_screenplay(
    request: FormatRequest,
    settings: Settings = Depends(get_settings_dependency),
) -> FormatResponse:
    """Format free-form screenplay text into screenplay conventions."""
    return _format(request, settings)


@router.post(
    "/format-scene",
    response_model=FormatResponse,
    status_code=status.HTTP_200_OK,
    summary="Format a single scene",
)
async def format_scene(
    request: FormatRequest,
    settings: Settings = Depends(get_settings_dependency),
) -> FormatResponse:
    """Format a single scene. Uses the same rules as a full screenplay."""
    return _format(request, settings)


@router.post(
    "/validate",
    response_model=ValidationResult,
    status_code=status.HTTP_200_OK,
    summary="Validate screenplay formatting",
)
async def validate_screenplay(
    request: ValidateRequest,
    settings: Settings = Depends(get_settings_dependency),
) -> ValidationResult:
    """Validate formatting. No checks are implemented yet (``implemented=false``)."""
    _check_size(request.text, settings)
    return validate_format(request.text)


@router.post(
    "/fix",
    response_model=FixResponse,
    status_code=status.HTTP_200_OK,
    summary="Fix formatting issues",
)
async def fix_screenplay(
    request: FixRequest,
    settings: Settings = Depends(get_settings_dependency),
) -> FixResponse:
    """Apply automatic fixes. Currently returns the text unchanged."""
    _check_size(request.text, settings)
    return FixResponse(text=fix_format_issues(request.text, request.issues))


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


@router.post(
    "/generate-concept",
    response_model=ConceptResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate a film concept from a premise",
)
async def generate_concept(
    request: GenerateConceptRequest,
    generator: ScriptGenerator = Depends(get_script_generator),
) -> ConceptResponse:
    concept = await generator.generate_concept(
        request.premise,
        genre=request.genre,
        themes=request.themes,
        length=request.length,
    )
    return ConceptResponse(concept=concept)


@router.post(
    "/generate-screenplay",
    response_model=ScreenplayResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate and format a screenplay from a concept",
)
async def generate_screenplay(
    request: GenerateScreenplayRequest,
    generator: ScriptGenerator = Depends(get_script_generator),
) -> ScreenplayResponse:
    screenplay = await generator.generate_screenplay(
        request.concept,
        characters=request.characters,
        structure=request.structure,
    )
    logger.info(
        "Generated screenplay: %d raw chars, %d formatted lines",
        len(screenplay.raw),
        screenplay.formatted.count("\n") + 1,
    )
    return ScreenplayResponse(screenplay=screenplay)


@router.post(
    "/generate-scene",
    response_model=SceneResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate and format a single scene",
)
async def generate_scene(
    request: GenerateSceneRequest,
    generator: ScriptGenerator = Depends(get_script_generator),
) -> SceneResponse:
    scene = await generator.generate_scene(
        request.scene_description,
        characters=request.characters,
        context=request.context,
    )
    return SceneResponse(scene=scene)


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze a screenplay",
)
async def analyze_screenplay(
    request: AnalyzeRequest,
    generator: ScriptGenerator = Depends(get_script_generator),
    settings: Settings = Depends(get_settings_dependency),
) -> AnalysisResponse:
    _check_size(request.screenplay, settings)
    analysis = await generator.analyze_screenplay(request.screenplay)
    return AnalysisResponse(analysis=analysis)
