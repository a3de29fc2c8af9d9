"""Pydantic models for API request/response schemas and screenplay elements."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ElementKind(str, Enum):
    """Semantic kind of a classified screenplay block."""

    SCENE_HEADING = "scene_heading"
    CHARACTER = "character"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    TRANSITION = "transition"
    TECHNICAL = "technical"
    ACTION = "action"


class IssueSeverity(str, Enum):
    """Severity of a formatting issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class LLMProviderType(str, Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    LOCALAI = "localai"


# ---------------------------------------------------------------------------
# Formatting models -- transient, never persisted
# ---------------------------------------------------------------------------


class FormatIssue(BaseModel):
    """A single formatting problem found in a screenplay."""

    line: int | None = Field(None, ge=1, description="1-based line number, if known")
    kind: ElementKind | None = Field(None, description="Element kind the issue refers to")
    message: str = Field(..., min_length=1, description="Human-readable description")
    severity: IssueSeverity = Field(default=IssueSeverity.WARNING, description="Issue severity")


class ValidationResult(BaseModel):
    """Outcome of a format validation pass.

    ``implemented`` is ``False`` while validation is a reserved extension
    point: callers must not read ``valid=True`` as a guarantee that checks ran.
    """

    valid: bool = Field(..., description="True if no issues were found")
    issues: list[FormatIssue] = Field(default_factory=list, description="Issues found")
    implemented: bool = Field(
        default=False, description="Whether any validation checks are actually performed"
    )


class FormattedElement(BaseModel):
    """One classified block together with its rendered form."""

    kind: ElementKind = Field(..., description="Classified element kind")
    text: str = Field(..., description="Concatenated source text of the block")
    rendered: str = Field(..., description="Formatted output for the block")


class FormattedScript(BaseModel):
    """Raw LLM output paired with its formatted rendition."""

    raw: str = Field(..., description="Unformatted source text")
    formatted: str = Field(..., description="Formatted screenplay text")


# Request Models


class FormatRequest(BaseModel):
    """Request model for the format endpoints."""

    text: str = Field(..., description="Raw screenplay or scene text (may be empty)")
    detect_dialogue: bool | None = Field(
        None,
        description="Classify text following a character cue as dialogue "
        "(defaults to the server setting)",
    )


class ValidateRequest(BaseModel):
    """Request model for format validation."""

    text: str = Field(..., description="Screenplay text to validate")


class FixRequest(BaseModel):
    """Request model for automatic format fixing."""

    text: str = Field(..., description="Screenplay text to fix")
    issues: list[FormatIssue] = Field(default_factory=list, description="Issues to fix")


class GenerateConceptRequest(BaseModel):
    """Request model for concept generation."""

    premise: str = Field(..., min_length=1, max_length=10_000, description="Film premise")
    genre: str | None = Field(None, max_length=200, description="Optional genre")
    themes: list[str] | str | None = Field(None, description="Optional themes to explore")
    length: str | None = Field(
        None, max_length=200, description="Target length (short, feature, ...)"
    )


class GenerateScreenplayRequest(BaseModel):
    """Request model for screenplay generation."""

    concept: dict[str, Any] | str = Field(..., description="Expanded concept")
    characters: list[dict[str, Any] | str] | None = Field(
        None, description="Optional character details"
    )
    structure: str | None = Field(None, max_length=200, description="Story structure preference")

    @field_validator("concept")
    @classmethod
    def validate_concept(cls, v: dict[str, Any] | str) -> dict[str, Any] | str:
        """Reject empty concepts."""
        if not v or (isinstance(v, str) and not v.strip()):
            raise ValueError("Concept cannot be empty")
        return v


class GenerateSceneRequest(BaseModel):
    """Request model for single-scene generation."""

    scene_description: str = Field(
        ..., min_length=1, max_length=10_000, description="Description of the scene"
    )
    characters: list[dict[str, Any] | str] | None = Field(
        None, description="Characters in the scene"
    )
    context: dict[str, Any] | str | None = Field(
        None, description="Context from the larger screenplay"
    )


class AnalyzeRequest(BaseModel):
    """Request model for screenplay analysis."""

    screenplay: str = Field(..., min_length=1, description="Screenplay to analyze")


# Response Models


class FormatResponse(FormattedScript):
    """Response model for the format endpoints."""

    elements: dict[str, int] = Field(
        default_factory=dict, description="Number of blocks per element kind"
    )


class FixResponse(BaseModel):
    """Response model for format fixing."""

    text: str = Field(..., description="Fixed screenplay text")


class ConceptResponse(BaseModel):
    """Response model for concept generation."""

    success: bool = Field(default=True)
    concept: dict[str, Any] = Field(..., description="Generated concept")


class ScreenplayResponse(BaseModel):
    """Response model for screenplay generation."""

    success: bool = Field(default=True)
    screenplay: FormattedScript


class SceneResponse(BaseModel):
    """Response model for scene generation."""

    success: bool = Field(default=True)
    scene: FormattedScript


class AnalysisResponse(BaseModel):
    """Response model for screenplay analysis."""

    success: bool = Field(default=True)
    analysis: dict[str, Any] = Field(..., description="Analysis result")


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(json_encoders={datetime: lambda v: v.isoformat()})

    status: str = Field(default="healthy", description="Service health status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")
    version: str = Field(default="0.1.0", description="API version")


class ReadinessResponse(BaseModel):
    """Readiness check response with dependency status."""

    status: str = Field(..., description="Overall readiness status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")
    services: dict[str, bool] = Field(..., description="Per-dependency availability")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(None, description="Field that caused the error")
    message: str = Field(..., description="Error message")
    error_code: str | None = Field(None, description="Error code for programmatic handling")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(default_factory=list, description="Detailed error info")
    request_id: str | None = Field(None, description="Request tracking ID")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
