"""Validation models — rule results, remote rules, and the report structure.

All validation is deterministic: same ruleset + same dataset → same report.
"""

import html
import json
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field


class RuleResult(BaseModel):
    """Outcome of applying one rule to one field value.

    ``value`` is set when the rule rewrites the field (e.g. postcode
    normalisation). The engine records the replacement in the report.
    """

    passed: bool
    value: Optional[str] = None

    @classmethod
    def coerce(cls, outcome: Any) -> "RuleResult":
        """Accept a RuleResult or any truthy/falsy return from a rule function."""
        if isinstance(outcome, RuleResult):
            return outcome
        return cls(passed=bool(outcome))


class RemoteRule(BaseModel):
    """A rule supplied at runtime by the embedding application."""

    name: str
    message: str
    predicate: Callable[[str], Any]

    def check(self, value: str) -> bool:
        return bool(self.predicate(value))


class ValidationReport(BaseModel):
    """Result of one validation pass over a dataset."""

    valid: bool = Field(description="True if every rule on every field passed")
    errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Field name → messages, in rule evaluation order",
    )
    cleaned_data: dict[str, str] = Field(
        default_factory=dict,
        description="Dataset snapshot after rule normalisation",
    )
    normalized: dict[str, str] = Field(
        default_factory=dict,
        description="Only the fields a rule rewrote, with their new value",
    )

    def field_errors(self, field_name: str) -> list[str]:
        return self.errors.get(field_name, [])

    def first_errors(self) -> dict[str, str]:
        """First message per field — the shape jQuery Validation's showErrors() takes."""
        return {name: messages[0] for name, messages in self.errors.items()}

    def jqv_errors_json(self) -> str:
        return json.dumps(self.first_errors())

    def error_for_field(self, field_name: str) -> str:
        """Render the first error of a field as a jQuery Validation error label.

        Returns an empty string when the field has no errors.
        """
        messages = self.field_errors(field_name)
        if not messages:
            return ""
        return (
            f'<label generated="true" for="{html.escape(field_name)}" class="error">'
            f"{messages[0]}</label>"
        )
