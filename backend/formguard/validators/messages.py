"""Message catalog — rule name → parameterised error message template.

Templates use jQuery Validation's positional placeholders: ``{0}``, ``{1}``.
Tables are merged explicitly; nothing here is mutated after construction.
"""

import html
import json
from pathlib import Path
from typing import Any, Mapping, Optional

DEFAULT_MESSAGE = "Please fix this field."

BASE_MESSAGES = {
    "REQUIRED": "This field is required.",
    "REMOTE": DEFAULT_MESSAGE,
    "EMAIL": "Please enter a valid email address.",
    "URL": "Please enter a valid URL.",
    "DATE": "Please enter a valid date.",
    "DATEISO": "Please enter a valid date (YYYY-MM-DD).",
    "NUMBER": "Please enter a valid number.",
    "DIGITS": "Please enter only digits.",
    "CREDITCARD": "Please enter a valid credit card number.",
    "EQUALTO": "Please enter the same value again.",
    "ACCEPT": "Please enter a value with a valid extension.",
    "MINLENGTH": "Please enter at least {0} characters.",
    "MAXLENGTH": "Please enter no more than {0} characters.",
    "RANGE": "Please enter a value between {0} and {1}.",
    "MIN": "Please enter a value greater than or equal to {0}.",
    "MAX": "Please enter a value less than or equal to {0}.",
    "RANGELENGTH": "Please enter a value between {0} and {1} characters long.",
}

ADDITIONAL_MESSAGES = {
    "EXTENSION": "Please enter a value with a valid extension.",
    "MAXWORDS": "Please enter {0} words or less.",
    "MINWORDS": "Please enter at least {0} words.",
    "RANGEWORDS": "Please enter between {0} and {1} words.",
    "LETTERSWITHBASICPUNC": "Letters or punctuation only please.",
    "ALPHANUMERIC": "Letters, numbers, and underscores only please.",
    "LETTERSONLY": "Letters only please.",
    "NOWHITESPACE": "No white space please.",
    "INTEGER": "A positive or negative non-decimal number please.",
    "TIME24H": "Please enter a valid time, between 00:00 and 23:59",
    "TIME12H": "Please enter a valid time, between 00:00 am and 12:00 pm",
    "PHONEUS": "Please specify a valid phone number",
    "PHONEUK": "Please specify a valid phone number",
    "MOBILEUK": "Please specify a valid mobile number",
    "POSTCODE": "Please specify a valid postcode",
    "STRIPPEDMINLENGTH": "Please enter at least {0} characters",
}


def _param_text(value: Any) -> str:
    """Render a parameter the way it reads in the client-side message."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class MessageCatalog:
    """Layered message table: later tables override earlier ones."""

    def __init__(self, *tables: Mapping[str, str]):
        merged: dict[str, str] = {}
        for table in tables or (BASE_MESSAGES,):
            merged.update({key.upper(): text for key, text in table.items()})
        self._messages = merged

    @classmethod
    def from_file(cls, path: str, *base_tables: Mapping[str, str]) -> "MessageCatalog":
        """Build a catalog whose overrides come from a JSON object file."""
        overrides = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(*(base_tables or (BASE_MESSAGES,))).merged_with(overrides)

    def merged_with(self, *tables: Mapping[str, str]) -> "MessageCatalog":
        """New catalog with ``tables`` layered over this one."""
        return MessageCatalog(self._messages, *tables)

    def template(self, rule_name: str) -> Optional[str]:
        return self._messages.get(rule_name.strip().upper())

    def render(self, rule_name: str, params: Any = None) -> str:
        """Fill a rule's template with its parameters.

        Array params fill ``{0}``, ``{1}``... positionally; anything else
        fills ``{0}``. Substituted values are HTML-escaped.
        """
        message = self.template(rule_name) or DEFAULT_MESSAGE
        if not isinstance(params, (list, tuple)):
            params = [params]
        for index, value in enumerate(params):
            message = message.replace("{%d}" % index, html.escape(_param_text(value)))
        return message

    def __contains__(self, rule_name: str) -> bool:
        return rule_name.strip().upper() in self._messages

    def as_dict(self) -> dict[str, str]:
        return dict(self._messages)
