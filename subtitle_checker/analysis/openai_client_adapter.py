import httpx
import openai

from subtitle_checker.analysis.client_base import BaseAnalysisClient
from subtitle_checker.analysis.exceptions import AnalysisNetworkError, AnalysisResponseError
from subtitle_checker.analysis.models import ChatCompletion, TokenUsage


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client built on the OpenAI-compatible chat completions API.

    Serves OpenAI itself, OpenRouter, Ollama's /v1 endpoint and any other
    OpenAI-compatible server, depending on base_url.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        max_retries: int = 0,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            # the SDK refuses an empty key even for servers that ignore it
            api_key=api_key or "not-needed",
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=max_retries,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> ChatCompletion:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AnalysisResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise AnalysisResponseError("AI returned empty response")
        return ChatCompletion(content=content, usage=self._usage(response.usage))

    @staticmethod
    def _usage(usage: object) -> TokenUsage | None:
        if usage is None:
            return None
        return TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )
