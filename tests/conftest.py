"""
Pytest configuration and fixtures.

Provides common test fixtures for all test modules.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Generator

import pytest

from answer_grader.config import Settings
from answer_grader.models import GradingRequest, ProviderConfig, ProviderKind


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# Sample Request Fixtures
# ==============================================================================


@pytest.fixture
def sample_request() -> GradingRequest:
    """Create a sample grading request."""
    return GradingRequest(
        question_text="What is recursion? Briefly describe the concept and where it is used.",
        reference_answer=(
            "Recursion is a technique where a function calls itself to solve a problem. "
            "It needs a base case that stops the recursion and a recursive case that calls "
            "the function again. It is used for tree traversal, factorials and the "
            "Fibonacci sequence."
        ),
        student_answer="Recursion is when a function calls itself. It can compute factorials.",
        scoring_criteria="Concept (2 points), elements (2 points), applications (1 point)",
    )


@pytest.fixture
def minimal_request() -> GradingRequest:
    """A request without a rubric or current score."""
    return GradingRequest(
        question_text="Define photosynthesis.",
        reference_answer="Plants convert light, water and CO2 into glucose and oxygen.",
        student_answer="Plants make food from sunlight.",
    )


# ==============================================================================
# LLM Response Fixtures
# ==============================================================================


@pytest.fixture
def sample_llm_payload() -> dict[str, Any]:
    """A well-formed grading reply as a dict."""
    return {
        "score": 2,
        "scoreLabel": "passing",
        "upgradeAnswer": {
            "targetScore": 3,
            "templateAnswer": "Recursion is a technique where a function calls itself...",
            "keyPoints": ["Define recursion", "Name the base case", "Give two applications"],
        },
        "feedback": {
            "strengths": ["Captures the core idea of self-calling functions"],
            "weaknesses": ["Does not mention the base case", "Only one application"],
            "suggestions": [
                "Explain the base case",
                "Add tree traversal as an example",
                "Describe the recursive case",
            ],
        },
    }


@pytest.fixture
def sample_llm_response(sample_llm_payload: dict[str, Any]) -> str:
    """Sample LLM grading response wrapped in a json fence."""
    return f"```json\n{json.dumps(sample_llm_payload, indent=2)}\n```"


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with mocked values."""
    return Settings(
        _env_file=None,
        grader_provider=ProviderKind.ZHIPU,
        openai_api_key="sk-test-openai-key",
        anthropic_api_key="sk-ant-test-key",
        zhipu_api_key="zhipu-test-key-0123456789abcdef",
        zhipu_base_url="https://zhipu.test.local/api/paas/v4/",
    )


@pytest.fixture
def zhipu_config() -> ProviderConfig:
    """Resolved configuration for the Zhipu provider."""
    return ProviderConfig(
        provider=ProviderKind.ZHIPU,
        api_key="zhipu-test-key-0123456789abcdef",
        base_url="https://zhipu.test.local/api/paas/v4",
    )
