"""
Grading engine - the call-site orchestrator.

Resolves which provider to use from configuration and hands the request
to it. Holds no state between calls, performs no retries and imposes no
ordering on concurrent calls.
"""

import logging

from answer_grader.config import Settings, get_settings
from answer_grader.grading.providers import GradingProvider, create_provider
from answer_grader.models import GradingRequest, GradingResult, ProviderConfig, ProviderKind

logger = logging.getLogger(__name__)


async def grade_answer(request: GradingRequest, config: ProviderConfig) -> GradingResult:
    """
    Grade a request with the provider selected by `config`.

    Args:
        request: The grading request.
        config: Resolved provider configuration.

    Returns:
        The normalized GradingResult.

    Raises:
        GradingError: If the provider call fails.
    """
    provider = create_provider(config)
    logger.info("Grading with %s (%s)", config.provider.value, config.resolved_model)

    result = await provider.grade(request)

    logger.info("Graded answer: %d (%s)", result.score, result.score_label.value)
    return result


class GradingEngine:
    """
    Grades answers using the provider chosen in settings.

    A thin wrapper over `grade_answer` that resolves provider credentials
    from environment configuration.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the grading engine.

        Args:
            settings: Configuration settings. Uses global settings if not provided.
        """
        self._settings = settings or get_settings()

    def resolve(
        self, provider: ProviderKind | None = None, model: str | None = None
    ) -> ProviderConfig:
        """
        Resolve the provider configuration for a call.

        Raises:
            ConfigurationError: If the provider has no API key configured.
        """
        return self._settings.provider_config(provider, model)

    def create_provider(
        self, provider: ProviderKind | None = None, model: str | None = None
    ) -> GradingProvider:
        """Build the adapter for a provider without grading anything."""
        return create_provider(self.resolve(provider, model))

    async def grade(
        self,
        request: GradingRequest,
        provider: ProviderKind | None = None,
        model: str | None = None,
    ) -> GradingResult:
        """
        Grade a student answer.

        Args:
            request: The grading request.
            provider: Override the configured provider.
            model: Override the configured model.

        Returns:
            The normalized GradingResult.

        Raises:
            ConfigurationError: If the provider has no API key configured.
            GradingError: If the provider call fails.
        """
        return await grade_answer(request, self.resolve(provider, model))
