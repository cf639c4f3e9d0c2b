"""Shared fixtures: the demo rulesets and engines built around them."""

from pathlib import Path

import pytest

from formguard.validators import Ruleset, ValidationEngine

FIXTURES = Path(__file__).parent / "fixtures"

REMOTE_MESSAGE = "Please check your email address."


@pytest.fixture
def demo_ruleset() -> Ruleset:
    return Ruleset.from_file(FIXTURES / "demo.validate.json")


@pytest.fixture
def additional_ruleset() -> Ruleset:
    return Ruleset.from_file(FIXTURES / "additional.validate.json")


@pytest.fixture
def demo_data() -> dict:
    """A submission of the demo form that passes every rule."""
    return {
        "RequiredField": "anything",
        "EmailField": "howard@gg.com",
        "ConfirmEmailField": "howard@gg.com",
        "UrlField": "http://www.example.com/path?q=1",
        "DateField": "2013-01-20",
        "DateISOField": "2013-01-20",
        "NumberField": "-1,234.5",
        "DigitsField": "0123",
        "CreditCardField": "4111111111111111",
        "FileField": "report.pdf",
        "MinlengthField": "abcdef",
        "MaxlengthField": "abcdefghij",
        "RangeField": "50",
        "MinField": "20",
        "MaxField": "50",
        "RangelengthField": "abcde",
        "RemoteField": "howard@gg.com",
    }


@pytest.fixture
def engine(demo_ruleset) -> ValidationEngine:
    engine = ValidationEngine(ruleset=demo_ruleset)
    engine.add_remote_rule("checkEmail", REMOTE_MESSAGE, lambda value: value == "howard@gg.com")
    return engine
