"""
Claude grading provider.

Uses the Anthropic messages API, where the system instruction is a separate
field rather than a chat turn.
"""

import logging

from anthropic import APIError, APIStatusError, AsyncAnthropic

from answer_grader.grading.errors import InvalidResponseKindError, ProviderRequestError
from answer_grader.grading.normalizer import normalize_result
from answer_grader.grading.prompt_builder import PromptBuilder
from answer_grader.grading.response_parser import parse_response
from answer_grader.models import DEFAULT_MODELS, GradingRequest, GradingResult, ProviderKind

logger = logging.getLogger(__name__)


class ClaudeProvider:
    """Grades answers through the Anthropic messages endpoint."""

    name = ProviderKind.CLAUDE.value
    temperature = 0.3
    max_tokens = 2048

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODELS[ProviderKind.CLAUDE],
        base_url: str | None = None,
        client: AsyncAnthropic | None = None,
    ):
        self.model = model
        self._client = client or AsyncAnthropic(api_key=api_key, base_url=base_url)

    async def grade(self, request: GradingRequest) -> GradingResult:
        prompt = PromptBuilder.build_grading_prompt(request)
        logger.debug("Requesting Claude grading with model %s", self.model)

        try:
            message = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=PromptBuilder.get_system_prompt(),
                messages=[{"role": "user", "content": prompt}],
            )
        except APIStatusError as e:
            logger.warning("Claude returned status %s: %s", e.status_code, e.message)
            raise ProviderRequestError(
                f"Claude API error: {e.message}",
                provider=self.name,
                status_code=e.status_code,
                cause=e,
            ) from e
        except APIError as e:
            logger.warning("Claude request failed: %s", e.message)
            raise ProviderRequestError(
                f"Claude request failed: {e.message}",
                provider=self.name,
                cause=e,
            ) from e

        if not message.content:
            raise InvalidResponseKindError(self.name, None)

        block = message.content[0]
        if block.type != "text":
            raise InvalidResponseKindError(self.name, block.type)

        return normalize_result(parse_response(block.text), request, include_encouragement=True)
