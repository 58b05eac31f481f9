"""Provider interface used by the rule suggester."""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Provider call failed, or no provider could be configured."""


class LLMRateLimitError(LLMError):
    """Provider asked us to back off. The only error the suggester retries."""


class LLMAuthError(LLMError):
    pass


class LLMProvider(ABC):
    provider_name: str = "base"

    @abstractmethod
    def generate(self, messages: list[dict], system: str | None = None, max_tokens: int = 2000) -> str:
        """Return the reply text for a chat transcript of role/content dicts.

        SDK errors are translated to LLMError subclasses.
        """

    def complete(self, prompt: str, system: str | None = None, max_tokens: int = 2000) -> str:
        return self.generate([{"role": "user", "content": prompt}], system=system, max_tokens=max_tokens)
