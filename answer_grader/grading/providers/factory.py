"""
Provider factory module.

Selects the adapter for a provider tag and builds it from a resolved
ProviderConfig.
"""

from collections.abc import Callable

from answer_grader.grading.errors import UnsupportedProviderError
from answer_grader.grading.providers.base import GradingProvider
from answer_grader.grading.providers.claude_provider import ClaudeProvider
from answer_grader.grading.providers.openai_provider import OpenAIProvider
from answer_grader.grading.providers.zhipu_provider import ZhipuProvider
from answer_grader.models import ProviderConfig, ProviderKind

# Registry of all available adapters, keyed by provider tag
_PROVIDERS: dict[ProviderKind, Callable[[ProviderConfig], GradingProvider]] = {
    ProviderKind.OPENAI: lambda c: OpenAIProvider(c.api_key, c.resolved_model, c.base_url),
    ProviderKind.CLAUDE: lambda c: ClaudeProvider(c.api_key, c.resolved_model, c.base_url),
    ProviderKind.ZHIPU: lambda c: ZhipuProvider(c.api_key, c.resolved_model, c.base_url),
}


def get_supported_providers() -> tuple[str, ...]:
    """
    Get the tags of all supported providers.

    Returns:
        Tuple of provider tags (e.g., ('openai', 'claude', 'zhipu')).
    """
    return tuple(kind.value for kind in _PROVIDERS)


def create_provider(config: ProviderConfig) -> GradingProvider:
    """
    Create the adapter for a provider configuration.

    Args:
        config: Resolved provider configuration.

    Returns:
        A GradingProvider for the configured backend.

    Raises:
        UnsupportedProviderError: If no adapter is registered for the tag.
    """
    builder = _PROVIDERS.get(config.provider)
    if builder is None:
        raise UnsupportedProviderError(str(config.provider))
    return builder(config)
