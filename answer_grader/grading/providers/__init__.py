"""
LLM Provider Adapters.

Interchangeable backends behind a single `grade(request)` capability:
- OpenAI-compatible chat completions (SDK, JSON mode)
- Claude messages (SDK)
- Zhipu chat completions (raw HTTP)
"""

from answer_grader.grading.providers.base import GradingProvider
from answer_grader.grading.providers.claude_provider import ClaudeProvider
from answer_grader.grading.providers.factory import create_provider, get_supported_providers
from answer_grader.grading.providers.openai_provider import OpenAIProvider
from answer_grader.grading.providers.zhipu_provider import ZhipuProvider

__all__ = [
    "ClaudeProvider",
    "GradingProvider",
    "OpenAIProvider",
    "ZhipuProvider",
    "create_provider",
    "get_supported_providers",
]
