"""
Grading Module.

Prompt building, fault-tolerant response parsing, result normalization
and the provider adapters that tie them together.
"""

from answer_grader.grading.engine import GradingEngine, grade_answer
from answer_grader.grading.errors import (
    EmptyResponseError,
    GradingError,
    InvalidResponseKindError,
    ProviderRequestError,
    UnsupportedProviderError,
)
from answer_grader.grading.normalizer import normalize_result
from answer_grader.grading.prompt_builder import PromptBuilder, build_grading_prompt
from answer_grader.grading.response_parser import parse_response, parse_with_stage

__all__ = [
    "EmptyResponseError",
    "GradingEngine",
    "GradingError",
    "InvalidResponseKindError",
    "PromptBuilder",
    "ProviderRequestError",
    "UnsupportedProviderError",
    "build_grading_prompt",
    "grade_answer",
    "normalize_result",
    "parse_response",
    "parse_with_stage",
]
