"""AI rule suggestions from the learned-preference log.

The model's reply is untrusted input: it is parsed into RuleSuggestion values
when it has the expected shape, and into UnrecognizedSuggestion otherwise.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog

from cli.config_models import RetryConfig
from cli.retry import llm_retry_from_config
from llm import LLMError, LLMProvider, LLMRateLimitError
from preferences import PreferenceRecorder
from scan.models import CleaningRule
from scan.rules import RuleStore
from shared_types import BulkAction

from .prompts import PromptTemplates, format_history

logger = structlog.get_logger()

HISTORY_WINDOW = 20
MAX_SUGGESTIONS = 5

RULE_TYPE_ACTIONS: dict[str, Optional[BulkAction]] = {
    "auto_archive": BulkAction.ARCHIVE,
    "auto_compress": BulkAction.COMPRESS,
    "auto_delete": BulkAction.DELETE,
    "auto_organize": None,
    "auto_backup": None,
}
RISK_LEVELS = ("low", "medium", "high")


@dataclass(frozen=True)
class RuleSuggestion:
    rule_name: str
    rule_type: str
    description: str = ""
    risk_level: str = "medium"
    reasoning: str = ""
    trigger_conditions: dict = field(default_factory=dict)

    @property
    def requires_confirmation(self) -> bool:
        return self.risk_level != "low"

    def to_cleaning_rule(self) -> Optional[CleaningRule]:
        """Cleaning rule for delete/archive/compress suggestions with an extension."""
        action = RULE_TYPE_ACTIONS.get(self.rule_type)
        extension = self.trigger_conditions.get("file_extension")
        if action is None or not isinstance(extension, str) or not extension:
            return None
        try:
            return CleaningRule(
                name=self.rule_name,
                file_extension=extension,
                action=action,
                older_than_days=_optional_number(self.trigger_conditions.get("older_than_days"), int),
                larger_than_mb=_optional_number(self.trigger_conditions.get("larger_than_mb"), float),
            )
        except ValueError as e:
            logger.warning("suggestion_rule_invalid", rule_name=self.rule_name, error=str(e))
            return None


@dataclass(frozen=True)
class UnrecognizedSuggestion:
    payload: Any
    reason: str


Suggestion = RuleSuggestion | UnrecognizedSuggestion


def _optional_number(value, cast):
    if value is None or isinstance(value, bool):
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        return None


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[-1]
    if text.endswith("```"):
        text = text.rsplit("```", 1)[0]
    return text.strip()


def parse_suggestion(item: Any) -> Suggestion:
    if not isinstance(item, dict):
        return UnrecognizedSuggestion(item, "not an object")
    name = item.get("rule_name")
    rule_type = item.get("rule_type")
    if not isinstance(name, str) or not name.strip():
        return UnrecognizedSuggestion(item, "missing rule_name")
    if rule_type not in RULE_TYPE_ACTIONS:
        return UnrecognizedSuggestion(item, f"unknown rule_type: {rule_type!r}")
    risk = item.get("risk_level")
    conditions = item.get("trigger_conditions")
    return RuleSuggestion(
        rule_name=name.strip(),
        rule_type=rule_type,
        description=str(item.get("description") or ""),
        risk_level=risk if risk in RISK_LEVELS else "medium",
        reasoning=str(item.get("reasoning") or ""),
        trigger_conditions=conditions if isinstance(conditions, dict) else {},
    )


def parse_suggestions(response: str) -> list[Suggestion]:
    """Parse a model reply. Malformed JSON yields an empty list."""
    text = _strip_fences(response)
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("suggestion_parse_failed", response=text[:200])
        return []

    if isinstance(data, dict):
        items = data.get("suggestions", [])
    elif isinstance(data, list):
        items = data
    else:
        return [UnrecognizedSuggestion(data, "unexpected top-level value")]
    if not isinstance(items, list):
        return [UnrecognizedSuggestion(items, "suggestions is not a list")]
    return [parse_suggestion(item) for item in items[:MAX_SUGGESTIONS]]


class RuleSuggester:
    """Asks the LLM for automation rules tailored to recorded preferences."""

    def __init__(
        self,
        llm: LLMProvider,
        recorder: PreferenceRecorder,
        max_tokens: int = 2000,
        retry_config: Optional[RetryConfig] = None,
    ):
        self.llm = llm
        self.recorder = recorder
        self.max_tokens = max_tokens
        # Only rate limits are retried
        self._call_llm = llm_retry_from_config(retry_config, (LLMRateLimitError,))(self._request)

    def _request(self, prompt: str) -> str:
        return self.llm.complete(prompt, system=PromptTemplates.SYSTEM, max_tokens=self.max_tokens)

    def build_prompt(self) -> str:
        history = format_history(self.recorder.recent(HISTORY_WINDOW))
        return PromptTemplates.SUGGEST_RULES.format(history=history, max_suggestions=MAX_SUGGESTIONS)

    def suggest(self) -> list[Suggestion]:
        """Fetch suggestions. LLM failures are logged and yield an empty list."""
        try:
            response = self._call_llm(self.build_prompt())
        except LLMError as e:
            logger.error("rule_suggestion_failed", provider=self.llm.provider_name, error=str(e))
            return []
        suggestions = parse_suggestions(response)
        logger.info(
            "rule_suggestions_received",
            total=len(suggestions),
            unrecognized=sum(isinstance(s, UnrecognizedSuggestion) for s in suggestions),
        )
        return suggestions

    def accept(self, suggestion: RuleSuggestion, rules: RuleStore) -> Optional[CleaningRule]:
        """Persist a suggestion as a cleaning rule and log the choice."""
        rule = suggestion.to_cleaning_rule()
        if rule is None:
            return None
        saved = rules.add(rule)
        self.recorder.record_action("accept_suggestion", rule_type=suggestion.rule_type, category=suggestion.rule_name)
        return saved
