"""Rule catalog — rule name → rule function, plus runtime-registered remote rules.

Built-in rules are fixed when the catalog is built. Remote rules live in their
own namespace and are reached through the built-in ``remote`` rule, whose
parameters name the method: ``{"data": {"remoteMethod": "checkEmail"}}``.
"""

from typing import Any, Callable, Iterable, Mapping, Optional

import structlog

from formguard.validators.errors import ConfigurationError
from formguard.validators.messages import MessageCatalog
from formguard.validators.models import RemoteRule
from formguard.validators.rules import DEFAULT_RULE_SETS, RULE_SETS, RuleFunction

logger = structlog.get_logger()


def normalize_rule_name(name: str) -> str:
    """Lowercase and trim.

    jQuery Validation silently skips rules whose case is wrong (``dateiso``
    vs ``dateISO``), so rulesets in the wild carry both spellings.
    """
    return str(name).strip().lower()


def remote_method_name(params: Any) -> Optional[str]:
    """Pull ``data.remoteMethod`` out of a ``remote`` rule's parameters."""
    if not isinstance(params, Mapping):
        return None
    data = params.get("data")
    if not isinstance(data, Mapping):
        return None
    method = data.get("remoteMethod")
    return method if isinstance(method, str) else None


class RuleCatalog:
    """Registry of the rules a ValidationEngine can apply.

    Args:
        rule_sets: Names from ``RULE_SETS`` to compose, in order.
        extra_rules: Application-specific rules merged over the built-ins.
    """

    def __init__(
        self,
        rule_sets: Iterable[str] = DEFAULT_RULE_SETS,
        extra_rules: Optional[Mapping[str, RuleFunction]] = None,
    ):
        self.rule_sets = tuple(rule_sets)

        rules: dict[str, RuleFunction] = {}
        for set_name in self.rule_sets:
            if set_name not in RULE_SETS:
                raise ConfigurationError(
                    f"Unknown rule set '{set_name}'. Available: {', '.join(sorted(RULE_SETS))}"
                )
            rules.update(RULE_SETS[set_name].rules)
        rules.update(extra_rules or {})
        rules["remote"] = self._remote

        self._rules = {normalize_rule_name(name): func for name, func in rules.items()}
        self._remote_rules: dict[str, RemoteRule] = {}

    def lookup(self, rule_name: str) -> Optional[RuleFunction]:
        """Find a rule by name; None for rules this catalog does not know."""
        return self._rules.get(normalize_rule_name(rule_name))

    def __contains__(self, rule_name: str) -> bool:
        return normalize_rule_name(rule_name) in self._rules

    def names(self) -> list[str]:
        return list(self._rules)

    def default_messages(self) -> MessageCatalog:
        """Message catalog covering every rule set this catalog was built from."""
        return MessageCatalog(*(RULE_SETS[name].messages for name in self.rule_sets))

    # ── Remote rules ──

    def add_remote_rule(self, name: str, message: str, predicate: Callable[[str], Any]) -> None:
        """Register (or replace) a remote method.

        Args:
            name: Method name as it appears in ``data.remoteMethod``
            message: Message shown when the predicate rejects a value
            predicate: Called with the field value; truthy means valid
        """
        self._remote_rules[name] = RemoteRule(name=name, message=message, predicate=predicate)
        logger.info("remote_rule_registered", method=name)

    def get_remote(self, name: Optional[str]) -> Optional[RemoteRule]:
        if name is None:
            return None
        return self._remote_rules.get(name)

    def remote_names(self) -> list[str]:
        return list(self._remote_rules)

    def _remote(self, value: str, params: Any = None, data: Any = None) -> bool:
        rule = self.get_remote(remote_method_name(params))
        if rule is None:
            return False
        return rule.check(value)
