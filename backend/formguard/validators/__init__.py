"""Form Validator — server-side mirror of jQuery Validation rulesets.

Usage:
    from formguard.validators import ValidationEngine

    engine = ValidationEngine(ruleset=rules_json)
    report = engine.validate(form_data)
    if not report.valid:
        # Show report.errors next to the fields
"""

from formguard.validators.catalog import RuleCatalog
from formguard.validators.engine import ValidationEngine
from formguard.validators.errors import (
    ConfigurationError,
    FormguardError,
    InvalidDatasetError,
    RulesetFormatError,
    RulesetNotConfiguredError,
)
from formguard.validators.evaluator import FieldEvaluator
from formguard.validators.gateway import RemoteValidationGateway
from formguard.validators.messages import MessageCatalog
from formguard.validators.models import RemoteRule, RuleResult, ValidationReport
from formguard.validators.ruleset import Ruleset

__all__ = [
    "ValidationEngine",
    "RemoteValidationGateway",
    "FieldEvaluator",
    "RuleCatalog",
    "MessageCatalog",
    "Ruleset",
    "ValidationReport",
    "RuleResult",
    "RemoteRule",
    "FormguardError",
    "ConfigurationError",
    "InvalidDatasetError",
    "RulesetNotConfiguredError",
    "RulesetFormatError",
]
