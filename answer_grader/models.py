"""
Pydantic models for the Answer Grader system.

These models define the schemas for:
- Grading requests submitted by the caller
- Normalized grading results (score, label, upgrade template, feedback)
- Provider selection

Results serialize with camelCase field names so storage layers and UI
pages can consume them unchanged.
"""

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


# ==============================================================================
# Score Labels
# ==============================================================================


class ScoreLabel(str, Enum):
    """Human-readable label for a 1-5 score."""

    NEEDS_IMPROVEMENT = "needs improvement"
    PASSING = "passing"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"


SCORE_LABELS: dict[int, ScoreLabel] = {
    1: ScoreLabel.NEEDS_IMPROVEMENT,
    2: ScoreLabel.PASSING,
    3: ScoreLabel.AVERAGE,
    4: ScoreLabel.GOOD,
    5: ScoreLabel.EXCELLENT,
}

MIN_SCORE = 1
MAX_SCORE = 5

# Scores at or below this value are marked for the wrong-answer notebook
WRONG_ANSWER_THRESHOLD = 3


def label_for_score(score: int) -> ScoreLabel:
    """Look up the fixed label for a score, falling back to 'average'."""
    return SCORE_LABELS.get(score, ScoreLabel.AVERAGE)


# ==============================================================================
# Provider Models
# ==============================================================================


class ProviderKind(str, Enum):
    """Supported LLM backends."""

    OPENAI = "openai"
    CLAUDE = "claude"
    ZHIPU = "zhipu"


DEFAULT_MODELS: dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "gpt-4o-mini",
    ProviderKind.CLAUDE: "claude-3-5-sonnet-20241022",
    ProviderKind.ZHIPU: "glm-4-flash",
}

DEFAULT_BASE_URLS: dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "https://api.openai.com/v1",
    ProviderKind.CLAUDE: "https://api.anthropic.com",
    ProviderKind.ZHIPU: "https://open.bigmodel.cn/api/paas/v4",
}


class ProviderConfig(BaseModel):
    """
    Resolved configuration for a single provider adapter.

    Credential storage and validation belong to the caller; this is
    only the already-resolved selection handed to the factory.
    """

    model_config = ConfigDict(frozen=True)

    provider: ProviderKind = Field(
        ...,
        description="Which LLM backend to use",
    )

    api_key: str = Field(
        ...,
        min_length=1,
        description="API credential for the backend",
    )

    model: str | None = Field(
        default=None,
        description="Model identifier (provider default when omitted)",
    )

    base_url: str | None = Field(
        default=None,
        description="Optional endpoint override",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize empty strings to None and drop trailing slashes."""
        if not v:
            return None
        return v.rstrip("/")

    @property
    def resolved_model(self) -> str:
        """Model identifier with the provider default applied."""
        return self.model or DEFAULT_MODELS[self.provider]


# ==============================================================================
# Request Model
# ==============================================================================


class GradingRequest(BaseModel):
    """
    A single grading request.

    Constructed per call by the caller and never persisted by the core.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    question_text: str = Field(
        ...,
        min_length=1,
        description="The question the student answered",
    )

    reference_answer: str = Field(
        ...,
        min_length=1,
        description="Model reference answer to grade against",
    )

    student_answer: str = Field(
        ...,
        min_length=1,
        description="The student's free-text answer",
    )

    scoring_criteria: str = Field(
        default="",
        description="Optional scoring rubric",
    )

    current_score: int | None = Field(
        default=None,
        ge=MIN_SCORE,
        le=MAX_SCORE,
        description="The student's previous score on this question, if any",
    )

    @field_validator("question_text", "reference_answer", "student_answer")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Whitespace-only text counts as empty."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("scoring_criteria", mode="before")
    @classmethod
    def default_criteria(cls, v: Any) -> Any:
        """Treat a missing rubric as an empty one."""
        return "" if v is None else v


# ==============================================================================
# Grading Result Models
# ==============================================================================


class _ResultPart(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class UpgradeAnswer(_ResultPart):
    """An exemplar answer one score band above the student's."""

    target_score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    template_answer: str = Field(..., min_length=1)
    key_points: tuple[str, ...] = ()
    memorize_time: str | None = None


class Feedback(_ResultPart):
    """Strengths, weaknesses and study suggestions."""

    strengths: tuple[str, ...] = Field(..., min_length=1)
    weaknesses: tuple[str, ...] = Field(..., min_length=1)
    suggestions: tuple[str, ...] = Field(..., min_length=1)


class Encouragement(_ResultPart):
    """Motivational note produced by some providers."""

    message: str
    tip: str
    progress: str


class GradingResult(_ResultPart):
    """
    Normalized grading result.

    Always fully populated: the normalizer fills every field that the
    LLM omitted or mangled, so consumers never see a missing value.
    """

    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    score_label: ScoreLabel
    upgrade_answer: UpgradeAnswer
    feedback: Feedback
    encouragement: Encouragement | None = None

    @property
    def is_wrong(self) -> bool:
        """Whether this answer belongs in the wrong-answer notebook."""
        return self.score <= WRONG_ANSWER_THRESHOLD

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape used by storage and UI."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
