"""Claude (Anthropic) LLM provider."""

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class ClaudeProvider(LLMProvider):
    provider_name = "claude"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model = model or DEFAULT_MODEL
        if client:
            self.client = client
            return

        from anthropic import Anthropic

        self.client = Anthropic(api_key=api_key)

    @staticmethod
    def _translate(e: Exception) -> LLMError:
        from anthropic import APIError, AuthenticationError, RateLimitError

        if isinstance(e, AuthenticationError):
            return LLMAuthError(f"Claude auth failed: {e}")
        if isinstance(e, RateLimitError):
            return LLMRateLimitError(f"Claude rate limit: {e}")
        if isinstance(e, APIError):
            return LLMError(f"Claude API error: {e}")
        return LLMError(f"Claude error: {e}")

    def generate(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 2000
    ) -> str:
        kwargs = {"model": self.model, "max_tokens": max_tokens, "messages": messages}
        if system:
            kwargs["system"] = system
        try:
            response = self.client.messages.create(**kwargs)
        except Exception as e:
            raise self._translate(e) from e
        return "".join(getattr(block, "text", "") for block in response.content)
