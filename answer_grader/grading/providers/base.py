"""
Provider capability shared by all LLM backends.

Adapters do not inherit from a common base class; any object with an
async `grade` method satisfies the protocol.
"""

from typing import Protocol, runtime_checkable

from answer_grader.models import GradingRequest, GradingResult


@runtime_checkable
class GradingProvider(Protocol):
    """
    An LLM backend that can grade a request.

    Implementations make exactly one network call per `grade` invocation
    and never retry; retry and timeout policy belong to the caller.
    """

    name: str

    async def grade(self, request: GradingRequest) -> GradingResult:
        """
        Grade a student answer.

        Args:
            request: The grading request.

        Returns:
            A fully-populated GradingResult.

        Raises:
            GradingError: On transport or protocol failures.
        """
        ...
