"""Tests for AI rule suggestions."""

import json
from unittest.mock import MagicMock

import pytest

from cli.config_models import RetryConfig
from llm import LLMAuthError, LLMRateLimitError
from preferences import PreferenceRecorder
from scan import RuleStore
from shared_types import BulkAction
from suggestions import RuleSuggester, RuleSuggestion, UnrecognizedSuggestion, parse_suggestion, parse_suggestions
from suggestions.prompts import PromptTemplates, format_history

VALID = {
    "rule_name": "Archive old screenshots",
    "description": "Move screenshots older than 30 days",
    "rule_type": "auto_archive",
    "trigger_conditions": {"file_extension": ".png", "older_than_days": 30},
    "risk_level": "low",
    "reasoning": "You archived screenshots three times",
}


class TestParseSuggestion:
    def test_valid(self):
        s = parse_suggestion(VALID)
        assert isinstance(s, RuleSuggestion)
        assert s.rule_type == "auto_archive"
        assert not s.requires_confirmation

    def test_unknown_rule_type(self):
        s = parse_suggestion({**VALID, "rule_type": "auto_explode"})
        assert isinstance(s, UnrecognizedSuggestion)
        assert "auto_explode" in s.reason

    def test_missing_name(self):
        assert isinstance(parse_suggestion({**VALID, "rule_name": ""}), UnrecognizedSuggestion)

    def test_not_an_object(self):
        assert isinstance(parse_suggestion("delete everything"), UnrecognizedSuggestion)

    def test_unknown_risk_defaults_to_medium(self):
        s = parse_suggestion({**VALID, "risk_level": "extreme"})
        assert s.risk_level == "medium"
        assert s.requires_confirmation


class TestParseSuggestions:
    def test_object_with_list(self):
        result = parse_suggestions(json.dumps({"suggestions": [VALID, {"nope": 1}]}))
        assert isinstance(result[0], RuleSuggestion)
        assert isinstance(result[1], UnrecognizedSuggestion)

    def test_fenced_reply(self):
        reply = "```json\n" + json.dumps({"suggestions": [VALID]}) + "\n```"
        assert len(parse_suggestions(reply)) == 1

    def test_bare_list(self):
        assert len(parse_suggestions(json.dumps([VALID]))) == 1

    def test_invalid_json(self):
        assert parse_suggestions("Sure! Here are some ideas") == []

    def test_capped(self):
        assert len(parse_suggestions(json.dumps([VALID] * 9))) == 5


class TestToCleaningRule:
    def test_archive_rule(self):
        rule = parse_suggestion(VALID).to_cleaning_rule()
        assert rule.action is BulkAction.ARCHIVE
        assert rule.file_extension == ".png"
        assert rule.older_than_days == 30

    def test_organize_not_convertible(self):
        assert parse_suggestion({**VALID, "rule_type": "auto_organize"}).to_cleaning_rule() is None

    def test_missing_extension(self):
        s = parse_suggestion({**VALID, "trigger_conditions": {"older_than_days": 3}})
        assert s.to_cleaning_rule() is None

    def test_bad_numbers_ignored(self):
        s = parse_suggestion({**VALID, "trigger_conditions": {"file_extension": ".log", "larger_than_mb": "big"}})
        assert s.to_cleaning_rule().larger_than_mb is None


def test_format_history():
    assert format_history([]) == PromptTemplates.NO_HISTORY
    text = format_history([{"action": "delete", "file_type": "image", "category": "Duplicates"}])
    assert text == "- delete on image (Duplicates)"


class TestRuleSuggester:
    @pytest.fixture
    def recorder(self, entity_store):
        recorder = PreferenceRecorder(entity_store, "u1")
        recorder.record_action("delete", file_type="cache", category="Cache Files")
        return recorder

    def test_suggest(self, recorder):
        llm = MagicMock()
        llm.complete.return_value = json.dumps({"suggestions": [VALID]})
        suggester = RuleSuggester(llm, recorder, max_tokens=500)

        result = suggester.suggest()

        assert [s.rule_name for s in result] == ["Archive old screenshots"]
        prompt = llm.complete.call_args.args[0]
        assert "- delete on cache (Cache Files)" in prompt
        assert llm.complete.call_args.kwargs["max_tokens"] == 500

    def test_llm_error_yields_empty(self, recorder):
        llm = MagicMock(provider_name="claude")
        llm.complete.side_effect = LLMAuthError("bad key")
        assert RuleSuggester(llm, recorder).suggest() == []
        assert llm.complete.call_count == 1

    def test_accept_saves_rule_and_records(self, recorder, entity_store):
        rules = RuleStore(entity_store, "u1")
        suggester = RuleSuggester(MagicMock(), recorder)
        saved = suggester.accept(parse_suggestion(VALID), rules)

        assert saved.id
        assert [r.name for r in rules.list()] == ["Archive old screenshots"]
        assert recorder.entries()[-1]["action"] == "accept_suggestion"

    def test_rate_limit_retried(self, recorder):
        llm = MagicMock(provider_name="claude")
        llm.complete.side_effect = [LLMRateLimitError("slow down"), json.dumps([VALID])]
        no_wait = RetryConfig(max_attempts=2, min_wait=0, llm_max_wait=0)

        result = RuleSuggester(llm, recorder, retry_config=no_wait).suggest()

        assert len(result) == 1
        assert llm.complete.call_count == 2

    def test_rate_limit_exhausted(self, recorder):
        llm = MagicMock(provider_name="claude")
        llm.complete.side_effect = LLMRateLimitError("slow down")
        no_wait = RetryConfig(max_attempts=3, min_wait=0, llm_max_wait=0)

        assert RuleSuggester(llm, recorder, retry_config=no_wait).suggest() == []
        assert llm.complete.call_count == 3
