"""Prompt templates for AI rule suggestions."""


class PromptTemplates:
    SYSTEM = """You are an AI automation assistant for a digital decluttering app. You suggest cleaning and organizing rules based on what the user has done before.

Reply with JSON only. No prose outside the JSON object."""

    SUGGEST_RULES = """Based on the user's learned preferences, suggest intelligent automation rules.

User's Action History:
{history}

Analyze patterns and suggest:
1. Auto-archive rules (files not accessed in X days)
2. Auto-compress rules (large files in specific categories)
3. Auto-delete rules (temporary files, duplicates)
4. Auto-organize rules (move files to specific folders)
5. Auto-backup rules (critical files)

Return JSON with up to {max_suggestions} of the most relevant suggestions:
{{
  "suggestions": [
    {{
      "rule_name": "short name",
      "description": "what the rule does",
      "rule_type": "auto_archive | auto_compress | auto_delete | auto_organize | auto_backup",
      "trigger_conditions": {{"file_extension": ".tmp", "older_than_days": 30, "larger_than_mb": 100}},
      "risk_level": "low | medium | high",
      "reasoning": "why this helps the user"
    }}
  ]
}}"""

    NO_HISTORY = "- (no recorded actions yet)"


def format_history(entries: list[dict]) -> str:
    if not entries:
        return PromptTemplates.NO_HISTORY
    lines = []
    for p in entries:
        target = p.get("file_type") or p.get("files_count", "n/a")
        lines.append(f"- {p.get('action', 'unknown')} on {target} ({p.get('category', 'general')})")
    return "\n".join(lines)
