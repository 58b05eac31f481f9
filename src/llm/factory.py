"""Builds the configured LLM provider."""

import os

from .base import LLMError, LLMProvider

API_KEY_ENV = {"claude": "ANTHROPIC_API_KEY", "openai": "OPENAI_API_KEY"}


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Return a provider for rule suggestions.

    With no provider (or "auto"), an explicit key means Claude;
    otherwise the first of ANTHROPIC_API_KEY / OPENAI_API_KEY that is set
    picks the provider and supplies the key.
    """
    name = provider or "auto"
    if name == "auto":
        name = "claude" if api_key else _provider_from_env()
    if name not in API_KEY_ENV:
        raise LLMError(f"Unknown provider: {name}. Use: claude, openai")

    if not api_key and not client:
        api_key = os.getenv(API_KEY_ENV[name])

    if name == "openai":
        from .providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key, model=model, client=client)
    from .providers.claude import ClaudeProvider

    return ClaudeProvider(api_key=api_key, model=model, client=client)


def _provider_from_env() -> str:
    for name, env_var in API_KEY_ENV.items():
        if os.getenv(env_var):
            return name
    raise LLMError("No LLM API key found. Set ANTHROPIC_API_KEY or OPENAI_API_KEY")
