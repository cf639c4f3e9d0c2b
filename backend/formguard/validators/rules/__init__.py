"""Built-in rule sets, selectable by name.

    core        jQuery Validation's main bundle
    additional  jQuery Validation's additional-methods bundle
"""

from typing import Any, Callable, NamedTuple

from formguard.validators.messages import ADDITIONAL_MESSAGES, BASE_MESSAGES
from formguard.validators.rules.additional import ADDITIONAL_RULES
from formguard.validators.rules.core import CORE_RULES

RuleFunction = Callable[..., Any]


class RuleSet(NamedTuple):
    rules: dict[str, RuleFunction]
    messages: dict[str, str]


RULE_SETS: dict[str, RuleSet] = {
    "core": RuleSet(CORE_RULES, BASE_MESSAGES),
    "additional": RuleSet(ADDITIONAL_RULES, ADDITIONAL_MESSAGES),
}

DEFAULT_RULE_SETS = ("core", "additional")

__all__ = ["RULE_SETS", "DEFAULT_RULE_SETS", "RuleSet", "RuleFunction"]
