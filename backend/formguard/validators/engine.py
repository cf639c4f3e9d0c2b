"""Validation Engine — walks a ruleset over a dataset and produces a report.

This is the main entry point for form validation. It applies every rule the
ruleset declares to the submitted values and collects one message per failing
rule, keyed by field.

Usage:
    engine = ValidationEngine(ruleset=Ruleset.from_file("signup.validate.json"))
    engine.add_remote_rule("checkEmail", "Please check your email address.", is_free)
    report = engine.validate(request_form)
    if not report.valid:
        # Redisplay the form with report.error_for_field(name)
"""

import time
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

import structlog

from formguard.validators.catalog import RuleCatalog, normalize_rule_name, remote_method_name
from formguard.validators.errors import RulesetNotConfiguredError
from formguard.validators.evaluator import FieldEvaluator
from formguard.validators.messages import MessageCatalog
from formguard.validators.models import ValidationReport
from formguard.validators.ruleset import Ruleset

logger = structlog.get_logger()

RulesetLike = Union[Ruleset, Mapping[str, Any], str, bytes]


def as_text(value: Any) -> str:
    """Submitted values are strings; JSON clients may send numbers or null."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ValidationEngine:
    """Applies a ruleset to datasets.

    Design principles:
        - Deterministic: same ruleset + dataset → same report
        - Stateless across calls: the dataset snapshot lives for one call only
        - Tolerant: rules the catalog does not know are skipped, not errors
        - Strict about configuration: validating without a ruleset raises

    Args:
        catalog: Rules to apply. Defaults to the core + additional rule sets.
        messages: Message templates. Defaults to the tables of the catalog's rule sets.
        ruleset: Ruleset used when validate() is not given one.
    """

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        messages: Optional[MessageCatalog] = None,
        ruleset: Optional[RulesetLike] = None,
    ):
        self.catalog = catalog or RuleCatalog()
        self.messages = messages or self.catalog.default_messages()
        self.evaluator = FieldEvaluator(self.catalog)
        self.ruleset: Optional[Ruleset] = None
        if ruleset is not None:
            self.set_rules(ruleset)

    # ── Configuration ──

    def set_rules(self, ruleset: RulesetLike) -> None:
        self.ruleset = Ruleset.coerce(ruleset)

    def set_rule_file(self, path: Union[str, Path]) -> None:
        self.ruleset = Ruleset.from_file(path)

    def add_remote_rule(self, name: str, message: str, predicate: Callable[[str], Any]) -> None:
        """Register a remote method; see RuleCatalog.add_remote_rule."""
        self.catalog.add_remote_rule(name, message, predicate)

    # ── Validation ──

    def validate(
        self,
        data: Mapping[str, Any],
        ruleset: Optional[RulesetLike] = None,
    ) -> ValidationReport:
        """Validate a dataset against a ruleset.

        Args:
            data: Field name → submitted value, e.g. a parsed form body
            ruleset: Overrides the configured ruleset for this call

        Returns:
            ValidationReport with validity, messages per field, and any
            values the rules normalised

        Raises:
            RulesetNotConfiguredError: no ruleset given and none configured
        """
        rules = Ruleset.coerce(ruleset) if ruleset is not None else self.ruleset
        if rules is None:
            raise RulesetNotConfiguredError()

        start_time = time.perf_counter()

        # Snapshot: rules see normalised values, the caller's mapping stays untouched
        snapshot = {str(name): as_text(value) for name, value in data.items()}
        errors: dict[str, list[str]] = {}
        normalized: dict[str, str] = {}

        for field_name, field_rules in rules.items():
            value = snapshot.get(field_name, "")

            # Empty fields are either required (fail once) or optional (skip).
            # "0" is not empty.
            if value == "":
                if rules.is_required(field_name):
                    errors.setdefault(field_name, []).append(self.messages.render("required"))
                continue

            for rule_name, params in field_rules.items():
                result = self.evaluator.evaluate(rule_name, value, params, snapshot)
                if result is None:
                    continue

                if not result.passed:
                    errors.setdefault(field_name, []).append(
                        self._render_error(rule_name, params)
                    )
                elif result.value is not None and result.value != value:
                    value = result.value
                    snapshot[field_name] = value
                    normalized[field_name] = value

        report = ValidationReport(
            valid=not errors,
            errors=errors,
            cleaned_data=snapshot,
            normalized=normalized,
        )

        logger.info(
            "validation_complete",
            valid=report.valid,
            fields=len(rules),
            error_fields=list(errors),
            normalized_fields=list(normalized),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return report

    def is_valid(self, data: Mapping[str, Any], ruleset: Optional[RulesetLike] = None) -> bool:
        return self.validate(data, ruleset).valid

    def render_field_error(self, report: ValidationReport, field_name: str) -> str:
        """Error label markup for a field, or an empty string."""
        return report.error_for_field(field_name)

    def _render_error(self, rule_name: str, params: Any) -> str:
        """Message for a failed rule.

        ``remote`` failures use the message registered with the remote method;
        every other rule fills its template from the message catalog.
        """
        if normalize_rule_name(rule_name) == "remote":
            remote_rule = self.catalog.get_remote(remote_method_name(params))
            if remote_rule is not None:
                return remote_rule.message
        return self.messages.render(rule_name, params)
