"""AI-assisted cleaning rule suggestions."""

from .engine import (
    RuleSuggester,
    RuleSuggestion,
    Suggestion,
    UnrecognizedSuggestion,
    parse_suggestion,
    parse_suggestions,
)

__all__ = [
    "RuleSuggester",
    "RuleSuggestion",
    "Suggestion",
    "UnrecognizedSuggestion",
    "parse_suggestion",
    "parse_suggestions",
]
