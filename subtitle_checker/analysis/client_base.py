from abc import ABC, abstractmethod

from subtitle_checker.analysis.models import ChatCompletion


class BaseAnalysisClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> ChatCompletion:
        """Return the provider's reply text and token usage.

        Raises:
            AnalysisNetworkError: on connection failures, timeouts and API errors.
            AnalysisResponseError: when the reply carries no content.
        """
