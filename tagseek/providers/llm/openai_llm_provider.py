"""OpenAI LLM provider implementation for TagSeek agents."""

from collections.abc import Callable
from typing import Any

from loguru import logger
from openai import AsyncOpenAI

from tagseek.core.exceptions import LLMProviderError
from tagseek.core.tokens import TiktokenTokenizer
from tagseek.interfaces.llm_provider import (
    ChatMessage,
    ChatResponse,
    LLMProvider,
    ToolCall,
)


class OpenAILLMProvider(LLMProvider):
    """OpenAI LLM provider using GPT chat models with function calling."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4-1106-preview",
        base_url: str | None = None,
        timeout: int = 60,
        max_retries: int = 3,
    ):
        """Initialize OpenAI LLM provider.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            model: Model name to use
            base_url: Base URL for OpenAI API (optional for custom endpoints)
            timeout: Request timeout in seconds
            max_retries: Retry attempts for failed requests; the client backs
                off exponentially between attempts on rate limits, timeouts
                and 5xx responses
        """
        self._model = model
        self._timeout = timeout
        self._max_retries = max_retries

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout,
            "max_retries": max_retries,
        }
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = AsyncOpenAI(**client_kwargs)
        self._tokenizer = TiktokenTokenizer.for_model(model)

        # Usage tracking
        self._requests_made = 0
        self._tokens_used = 0
        self._prompt_tokens = 0
        self._completion_tokens = 0

    @property
    def name(self) -> str:
        """Provider name."""
        return "openai"

    @property
    def model(self) -> str:
        """Model name."""
        return self._model

    def _track_usage(self, usage: Any) -> int:
        self._requests_made += 1
        if not usage:
            return 0
        self._prompt_tokens += usage.prompt_tokens
        self._completion_tokens += usage.completion_tokens
        self._tokens_used += usage.total_tokens
        return usage.total_tokens

    async def chat(
        self,
        messages: list[ChatMessage],
        tools: list[dict[str, Any]] | None = None,
        temperature: float | None = None,
        max_completion_tokens: int = 4096,
        on_content: Callable[[str], None] | None = None,
    ) -> ChatResponse:
        """Send the conversation and return the assistant's turn.

        Streams when ``on_content`` is provided, otherwise issues a single
        non-streamed request. Both paths return the same assembled message.
        """
        request: dict[str, Any] = {
            "model": self._model,
            "messages": [m.to_openai() for m in messages],
            "max_completion_tokens": max_completion_tokens,
        }
        if tools:
            request["tools"] = tools
        if temperature is not None:
            request["temperature"] = temperature

        try:
            if on_content is None:
                return await self._chat_once(request)
            return await self._chat_streamed(request, on_content)
        except Exception as e:
            logger.error(f"OpenAI chat completion failed: {e}")
            raise LLMProviderError(f"LLM completion failed: {e}") from e

    async def _chat_once(self, request: dict[str, Any]) -> ChatResponse:
        response = await self._client.chat.completions.create(**request)
        tokens = self._track_usage(response.usage)

        choice = response.choices[0]
        tool_calls = [
            ToolCall(
                id=call.id,
                name=call.function.name,
                arguments=call.function.arguments or "",
            )
            for call in choice.message.tool_calls or []
        ]
        return ChatResponse(
            message=ChatMessage(
                role="assistant",
                content=choice.message.content,
                tool_calls=tool_calls,
            ),
            tokens_used=tokens,
            model=self._model,
            finish_reason=choice.finish_reason,
        )

    async def _chat_streamed(
        self, request: dict[str, Any], on_content: Callable[[str], None]
    ) -> ChatResponse:
        stream = await self._client.chat.completions.create(
            **request, stream=True, stream_options={"include_usage": True}
        )

        content_parts: list[str] = []
        # Tool call fragments arrive keyed by index; name/id come first,
        # arguments are concatenated across deltas
        partial_calls: dict[int, dict[str, str]] = {}
        finish_reason = None
        usage = None

        async for chunk in stream:
            if chunk.usage:
                usage = chunk.usage
            if not chunk.choices:
                continue

            choice = chunk.choices[0]
            delta = choice.delta
            if delta.content:
                content_parts.append(delta.content)
                on_content(delta.content)
            for fragment in delta.tool_calls or []:
                call = partial_calls.setdefault(
                    fragment.index, {"id": "", "name": "", "arguments": ""}
                )
                if fragment.id:
                    call["id"] = fragment.id
                if fragment.function:
                    if fragment.function.name:
                        call["name"] += fragment.function.name
                    if fragment.function.arguments:
                        call["arguments"] += fragment.function.arguments
            if choice.finish_reason:
                finish_reason = choice.finish_reason

        tokens = self._track_usage(usage)
        tool_calls = [
            ToolCall(id=c["id"], name=c["name"], arguments=c["arguments"])
            for _, c in sorted(partial_calls.items())
        ]
        return ChatResponse(
            message=ChatMessage(
                role="assistant",
                content="".join(content_parts) or None,
                tool_calls=tool_calls,
            ),
            tokens_used=tokens,
            model=self._model,
            finish_reason=finish_reason,
        )

    def estimate_tokens(self, text: str) -> int:
        """Token count under the model's tiktoken encoding."""
        return self._tokenizer.count(text)

    def get_usage_stats(self) -> dict[str, Any]:
        """Get usage statistics."""
        return {
            "requests_made": self._requests_made,
            "total_tokens": self._tokens_used,
            "prompt_tokens": self._prompt_tokens,
            "completion_tokens": self._completion_tokens,
        }
