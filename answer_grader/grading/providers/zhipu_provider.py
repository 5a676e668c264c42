"""
Zhipu grading provider.

Talks to the Zhipu chat completion endpoint over plain HTTP with bearer
token auth; there is no SDK in the loop.
"""

import logging
from typing import Any

import httpx

from answer_grader.grading.errors import EmptyResponseError, ProviderRequestError
from answer_grader.grading.normalizer import normalize_result
from answer_grader.grading.prompt_builder import PromptBuilder
from answer_grader.grading.response_parser import parse_response
from answer_grader.models import (
    DEFAULT_BASE_URLS,
    DEFAULT_MODELS,
    GradingRequest,
    GradingResult,
    ProviderKind,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull `error.message` out of an upstream error body, if there is one."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])

    return f"request failed: status {response.status_code}"


def _message_content(data: Any) -> str | None:
    """Return choices[0].message.content, or None if the shape is off."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class ZhipuProvider:
    """Grades answers through the Zhipu chat completion REST API."""

    name = ProviderKind.ZHIPU.value
    temperature = 0.3

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODELS[ProviderKind.ZHIPU],
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: Zhipu API key, sent as a bearer token.
            model: Model identifier.
            base_url: Optional endpoint override.
            client: Shared HTTP client. A short-lived client is opened per call if omitted.
            timeout: Timeout in seconds for the per-call client (no timeout if None).
        """
        self.model = model
        self._api_key = api_key
        self._endpoint = f"{(base_url or DEFAULT_BASE_URLS[ProviderKind.ZHIPU]).rstrip('/')}/chat/completions"
        self._client = client
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def grade(self, request: GradingRequest) -> GradingResult:
        prompt = PromptBuilder.build_grading_prompt(request)
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": PromptBuilder.get_system_prompt()},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        logger.debug("Requesting Zhipu grading with model %s", self.model)

        try:
            if self._client is not None:
                response = await self._client.post(self._endpoint, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Zhipu request failed: %s", e)
            raise ProviderRequestError(
                f"Zhipu request failed: {e}",
                provider=self.name,
                cause=e,
            ) from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning("Zhipu returned status %s: %s", response.status_code, message)
            raise ProviderRequestError(
                message,
                provider=self.name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderRequestError(
                "Zhipu returned a non-JSON response body",
                provider=self.name,
                status_code=response.status_code,
                cause=e,
            ) from e

        content = _message_content(data)
        if not content:
            raise EmptyResponseError(self.name)

        return normalize_result(parse_response(content), request, include_encouragement=True)
