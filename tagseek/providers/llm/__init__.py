"""LLM providers for TagSeek agents."""

from .openai_llm_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider"]
