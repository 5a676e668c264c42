"""
Result normalizer.

Turns whatever the response parser recovered into a fully-populated
GradingResult. Every field is decoded on its own with its own default, so
one malformed field never discards the good data next to it.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from answer_grader.models import (
    MAX_SCORE,
    MIN_SCORE,
    Encouragement,
    Feedback,
    GradingRequest,
    GradingResult,
    UpgradeAnswer,
    label_for_score,
)

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 3

DEFAULT_TEMPLATE_ANSWER = "No upgraded answer template available"
DEFAULT_STRENGTHS = ("No evaluation available",)
DEFAULT_WEAKNESSES = ("No evaluation available",)
DEFAULT_SUGGESTIONS = ("No suggestions available",)

DEFAULT_ENCOURAGEMENT = {
    "message": "Keep up the effort!",
    "tip": "Practice makes perfect.",
    "progress": "You are making progress!",
}


def _clamp(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


# Non-integer scores are bounded to +/- this before rounding
_ROUNDING_BOUND = Decimal(10 * MAX_SCORE)


def _as_int(value: Any) -> int | None:
    """Round a numeric value half-up to an int; None if not numeric."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    if isinstance(value, int):
        return value
    try:
        number = Decimal(value.strip() if isinstance(value, str) else str(value))
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    # quantize fails on values longer than the context precision
    number = max(-_ROUNDING_BOUND, min(_ROUNDING_BOUND, number))
    return int(number.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_text_list(value: Any) -> tuple[str, ...] | None:
    """Coerce a list of items to strings; None if not a usable list."""
    if not isinstance(value, (list, tuple)):
        return None
    texts = (item if isinstance(item, str) else str(item) for item in value if item is not None)
    return tuple(text for text in texts if text.strip())


def normalize_score(value: Any) -> int:
    """Decode a score, defaulting to 3 and clamping to [1, 5]."""
    score = _as_int(value)
    if score is None:
        return DEFAULT_SCORE
    return _clamp(score)


def normalize_upgrade_answer(value: Any, score: int) -> UpgradeAnswer:
    """Decode the upgrade answer; the target defaults to one band up."""
    raw = _as_dict(value)

    target = _as_int(raw.get("targetScore"))
    key_points = _as_text_list(raw.get("keyPoints"))
    memorize_time = raw.get("memorizeTime")

    return UpgradeAnswer(
        target_score=_clamp(target) if target else min(MAX_SCORE, score + 1),
        template_answer=_as_text(raw.get("templateAnswer")) or DEFAULT_TEMPLATE_ANSWER,
        key_points=key_points if key_points is not None else (),
        memorize_time=memorize_time if isinstance(memorize_time, str) else None,
    )


def normalize_feedback(value: Any) -> Feedback:
    """Decode feedback lists, defaulting each one independently."""
    raw = _as_dict(value)
    return Feedback(
        strengths=_as_text_list(raw.get("strengths")) or DEFAULT_STRENGTHS,
        weaknesses=_as_text_list(raw.get("weaknesses")) or DEFAULT_WEAKNESSES,
        suggestions=_as_text_list(raw.get("suggestions")) or DEFAULT_SUGGESTIONS,
    )


def normalize_encouragement(value: Any) -> Encouragement:
    """Decode the encouragement block, defaulting each field."""
    raw = _as_dict(value)
    return Encouragement(
        **{key: _as_text(raw.get(key)) or default for key, default in DEFAULT_ENCOURAGEMENT.items()}
    )


def normalize_result(
    parsed: dict[str, Any] | None,
    request: GradingRequest | None = None,
    *,
    include_encouragement: bool = False,
) -> GradingResult:
    """
    Build a GradingResult from a parsed LLM reply.

    Never raises. The score label from the reply is ignored and recomputed
    from the clamped score.

    Args:
        parsed: Object recovered by the response parser (may be empty).
        request: The originating request, used for logging context only.
        include_encouragement: Whether to populate the encouragement block.

    Returns:
        A fully-populated GradingResult.
    """
    raw = _as_dict(parsed)
    if not raw:
        logger.warning(
            "Empty grading reply%s, using default result",
            f" for question {request.question_text[:40]!r}" if request else "",
        )

    score = normalize_score(raw.get("score"))

    return GradingResult(
        score=score,
        score_label=label_for_score(score),
        upgrade_answer=normalize_upgrade_answer(raw.get("upgradeAnswer"), score),
        feedback=normalize_feedback(raw.get("feedback")),
        encouragement=(
            normalize_encouragement(raw.get("encouragement")) if include_encouragement else None
        ),
    )
