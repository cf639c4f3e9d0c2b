"""Ruleset loader — the field → {rule: params} document shared with the client.

The document is the same JSON jQuery Validation takes as its ``rules`` option,
so its shape is fixed by the client. Field and rule order are preserved.
"""

import copy
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

import structlog

from formguard.validators.catalog import normalize_rule_name, remote_method_name
from formguard.validators.errors import RulesetFormatError

logger = structlog.get_logger()


def is_truthy(params: Any) -> bool:
    """Truthiness of a rule parameter as the ruleset author meant it.

    ``"required": "0"`` is off, like ``false`` or ``0``.
    """
    if isinstance(params, str):
        return params not in ("", "0")
    return bool(params)


class Ruleset(Mapping[str, Mapping[str, Any]]):
    """Immutable, order-preserving view of a ruleset document."""

    def __init__(self, fields: Mapping[str, Any]):
        if not isinstance(fields, Mapping):
            raise RulesetFormatError(
                f"Ruleset must be an object of fields, got {type(fields).__name__}"
            )

        frozen = {}
        for field_name, rules in fields.items():
            if not isinstance(rules, Mapping):
                raise RulesetFormatError(
                    f"Rules for field '{field_name}' must be an object, got {type(rules).__name__}"
                )
            frozen[str(field_name)] = MappingProxyType(copy.deepcopy(dict(rules)))
        self._fields = MappingProxyType(frozen)

    # ── Construction ──

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Ruleset":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise RulesetFormatError(f"Cannot parse ruleset JSON: {e}") from e
        return cls(document)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Ruleset":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RulesetFormatError(f"Cannot read ruleset file '{path}': {e}") from e
        ruleset = cls.from_json(text)
        logger.info("ruleset_loaded", path=str(path), fields=len(ruleset))
        return ruleset

    @classmethod
    def coerce(cls, rules: Union["Ruleset", Mapping[str, Any], str, bytes]) -> "Ruleset":
        """Accept a Ruleset, a plain mapping, or a JSON document."""
        if isinstance(rules, Ruleset):
            return rules
        if isinstance(rules, (str, bytes)):
            return cls.from_json(rules)
        return cls(rules)

    # ── Mapping protocol ──

    def __getitem__(self, field_name: str) -> Mapping[str, Any]:
        return self._fields[field_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Ruleset({list(self._fields)})"

    # ── Queries ──

    def rule_params(self, field_name: str, rule_name: str) -> tuple[bool, Any]:
        """(declared, params) for a rule on a field, matching names case-insensitively."""
        wanted = normalize_rule_name(rule_name)
        for name, params in self._fields.get(field_name, {}).items():
            if normalize_rule_name(name) == wanted:
                return True, params
        return False, None

    def is_required(self, field_name: str) -> bool:
        declared, params = self.rule_params(field_name, "required")
        return declared and is_truthy(params)

    def remote_method(self, field_name: str) -> Optional[str]:
        """Method name of the field's ``remote`` rule, if it declares one."""
        declared, params = self.rule_params(field_name, "remote")
        if not declared:
            return None
        return remote_method_name(params)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Plain JSON-serialisable copy, e.g. for serving to the client validator."""
        return {name: copy.deepcopy(dict(rules)) for name, rules in self._fields.items()}
