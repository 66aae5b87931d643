"""Offline analysis client.

Reports every text as error-free. Useful for dry runs of the pipeline
without network access, and as a template for new provider adapters:
implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from subtitle_checker.analysis.client_base import BaseAnalysisClient
from subtitle_checker.analysis.models import ChatCompletion


class ExampleClientAdapter(BaseAnalysisClient):
    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": {
            "spellingErrors": 0,
            "grammarErrors": 0,
            "overallQuality": "not checked (offline example provider)",
        },
        "corrections": [],
        "analysis": "Offline example provider: no analysis performed.",
    }

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> ChatCompletion:
        _ = model, temperature, max_tokens, system_prompt, user_prompt
        return ChatCompletion(content=json.dumps(self.DEFAULT_RESPONSE))
