"""Field evaluator — applies one rule to one field value."""

from typing import Any, Mapping, Optional

import structlog

from formguard.validators.catalog import RuleCatalog, normalize_rule_name
from formguard.validators.models import RuleResult

logger = structlog.get_logger()


class FieldEvaluator:
    """Looks a rule up in the catalog and runs it.

    Unknown rules evaluate to ``None`` rather than failing: the ruleset is
    shared with the client validator, which may know rules this server does
    not.
    """

    def __init__(self, catalog: RuleCatalog):
        self.catalog = catalog

    def evaluate(
        self,
        rule_name: str,
        value: str,
        params: Any = None,
        data: Optional[Mapping[str, str]] = None,
    ) -> Optional[RuleResult]:
        """Run ``rule_name`` against ``value``.

        Args:
            rule_name: Rule name as written in the ruleset (any case)
            value: The field's current value
            params: The rule's parameters from the ruleset
            data: Dataset snapshot of this validation pass (for equalto)

        Returns:
            RuleResult, or None if the catalog has no such rule
        """
        rule = self.catalog.lookup(rule_name)
        if rule is None:
            logger.debug("unknown_rule", rule=normalize_rule_name(rule_name))
            return None
        return RuleResult.coerce(rule(value, params, data))
