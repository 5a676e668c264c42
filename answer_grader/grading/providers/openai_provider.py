"""
OpenAI-compatible grading provider.

Uses the OpenAI SDK's chat completions with JSON response mode. A custom
base URL lets the same adapter talk to OpenAI-compatible gateways.
"""

import logging

from openai import APIError, APIStatusError, AsyncOpenAI

from answer_grader.grading.errors import ProviderRequestError
from answer_grader.grading.normalizer import normalize_result
from answer_grader.grading.prompt_builder import PromptBuilder
from answer_grader.grading.response_parser import parse_response
from answer_grader.models import DEFAULT_MODELS, GradingRequest, GradingResult, ProviderKind

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """Grades answers through an OpenAI chat completion endpoint."""

    name = ProviderKind.OPENAI.value
    temperature = 0.5

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODELS[ProviderKind.OPENAI],
        base_url: str | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: OpenAI (or gateway) API key.
            model: Model identifier.
            base_url: Optional endpoint override for compatible gateways.
            client: Pre-built SDK client, mainly for tests.
        """
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def grade(self, request: GradingRequest) -> GradingResult:
        prompt = PromptBuilder.build_grading_prompt(request)
        logger.debug("Requesting OpenAI grading with model %s", self.model)

        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": PromptBuilder.get_system_prompt()},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except APIStatusError as e:
            logger.warning("OpenAI returned status %s: %s", e.status_code, e.message)
            raise ProviderRequestError(
                f"OpenAI API error: {e.message}",
                provider=self.name,
                status_code=e.status_code,
                cause=e,
            ) from e
        except APIError as e:
            logger.warning("OpenAI request failed: %s", e.message)
            raise ProviderRequestError(
                f"OpenAI request failed: {e.message}",
                provider=self.name,
                cause=e,
            ) from e

        content = completion.choices[0].message.content if completion.choices else None

        return normalize_result(parse_response(content or "{}"), request)
