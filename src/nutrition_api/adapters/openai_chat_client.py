"""OpenAI Chat Completions client."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from nutrition_api.domain.completions import CompletionResult
from nutrition_api.services.llm import CompletionClient


@dataclass
class OpenAIChatClient(CompletionClient):
    """Completion client backed by the OpenAI Chat Completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls,
        api_key: str,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "OpenAIChatClient":
        """Create a client that surfaces failures without retrying."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                http_client=http_client or httpx.AsyncClient(),
            )
        )

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        temperature: float,
        max_tokens: int | None = None,
        json_output: bool = True,
    ) -> CompletionResult:
        """Call the Chat Completions API and return the first choice."""
        request_payload: dict[str, object] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if json_output:
            request_payload["response_format"] = {"type": "json_object"}
        if max_tokens is not None:
            request_payload["max_tokens"] = max_tokens

        response = await self.client.chat.completions.create(**request_payload)
        choice = response.choices[0] if response.choices else None
        usage = response.usage.model_dump() if response.usage else {}
        return CompletionResult(
            content=choice.message.content if choice else None,
            finish_reason=choice.finish_reason if choice else None,
            model=response.model,
            usage=usage,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
