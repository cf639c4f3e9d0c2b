import json

import pytest

from formguard.validators import (
    MessageCatalog,
    RuleCatalog,
    RulesetNotConfiguredError,
    ValidationEngine,
)
from tests.conftest import REMOTE_MESSAGE


def test_valid_demo_submission(engine, demo_data):
    report = engine.validate(demo_data)
    assert report.valid
    assert report.errors == {}


def test_validate_is_deterministic(engine, demo_data):
    demo_data["EmailField"] = "nope"
    assert engine.validate(demo_data) == engine.validate(demo_data)


def test_required_and_empty_short_circuits():
    engine = ValidationEngine(ruleset={"Name": {"required": True, "minlength": 10, "digits": True}})
    report = engine.validate({"Name": ""})
    assert not report.valid
    assert report.errors == {"Name": ["This field is required."]}


def test_missing_field_counts_as_empty():
    engine = ValidationEngine(ruleset={"Name": {"required": True}, "Nick": {"minlength": 3}})
    report = engine.validate({})
    assert report.errors == {"Name": ["This field is required."]}


def test_optional_empty_field_is_skipped():
    engine = ValidationEngine(ruleset={"Website": {"url": True}, "Phone": {"required": False, "digits": True}})
    report = engine.validate({"Website": "", "Phone": ""})
    assert report.valid
    assert "Website" not in report.errors
    assert "Phone" not in report.errors


def test_zero_is_not_empty():
    engine = ValidationEngine(ruleset={"Qty": {"required": True, "digits": True}})
    assert engine.is_valid({"Qty": "0"})


def test_failures_accumulate_in_rule_order():
    engine = ValidationEngine(ruleset={"Code": {"digits": True, "minlength": 5, "maxlength": 10}})
    report = engine.validate({"Code": "ab"})
    assert report.errors == {
        "Code": ["Please enter only digits.", "Please enter at least 5 characters."],
    }


@pytest.mark.parametrize("length, valid", [(4, False), (5, True), (10, True), (11, False)])
def test_rangelength_message(length, valid):
    engine = ValidationEngine(ruleset={"Pw": {"rangelength": [5, 10]}})
    report = engine.validate({"Pw": "x" * length})
    assert report.valid is valid
    if not valid:
        assert report.errors["Pw"] == ["Please enter a value between 5 and 10 characters long."]


def test_equalto(engine, demo_data):
    demo_data.update(EmailField="a@b.com", ConfirmEmailField="a@b.com")
    assert engine.validate(demo_data).valid

    demo_data["ConfirmEmailField"] = "x"
    report = engine.validate(demo_data)
    assert report.errors == {"ConfirmEmailField": ["Please enter the same value again."]}


def test_unknown_rules_are_ignored():
    engine = ValidationEngine(ruleset={"Field": {"bogusrule": True, "ipv4": True}})
    report = engine.validate({"Field": "anything"})
    assert report.valid


def test_rule_names_are_case_insensitive():
    engine = ValidationEngine(ruleset={"When": {"DateISO": True}, "Mail": {" EMAIL ": True}})
    report = engine.validate({"When": "yesterday", "Mail": "nope"})
    assert report.errors == {
        "When": ["Please enter a valid date (YYYY-MM-DD)."],
        "Mail": ["Please enter a valid email address."],
    }


def test_message_params_are_escaped():
    engine = ValidationEngine(ruleset={"Title": {"maxlength": "<1>"}})
    report = engine.validate({"Title": "ab"})
    assert report.errors["Title"] == ["Please enter no more than &lt;1&gt; characters."]


def test_postcode_value_is_normalised_in_the_report():
    engine = ValidationEngine(ruleset={"Postcode": {"required": True, "postcode": True}})
    data = {"Postcode": "sw1a 1aa"}

    report = engine.validate(data)

    assert report.valid
    assert report.cleaned_data["Postcode"] == "SW1A 1AA"
    assert report.normalized == {"Postcode": "SW1A 1AA"}
    # the caller's mapping is left alone
    assert data == {"Postcode": "sw1a 1aa"}


def test_invalid_postcode_is_reported():
    engine = ValidationEngine(ruleset={"Postcode": {"postcode": True}})
    report = engine.validate({"Postcode": "not a postcode"})
    assert report.errors == {"Postcode": ["Please specify a valid postcode"]}
    assert report.normalized == {}
    assert report.cleaned_data["Postcode"] == "not a postcode"


def test_normalised_values_feed_later_rules():
    engine = ValidationEngine(
        ruleset={
            "Postcode": {"postcode": True},
            "PostcodeAgain": {"equalTo": "#Postcode"},
        }
    )
    report = engine.validate({"Postcode": "sw1a1aa", "PostcodeAgain": "SW1A 1AA"})
    assert report.valid


def test_non_string_values_are_compared_as_text():
    engine = ValidationEngine(ruleset={"Age": {"required": True, "range": [18, 99]}, "Note": {"required": True}})
    report = engine.validate({"Age": 42, "Note": None})
    assert report.errors == {"Note": ["This field is required."]}


def test_remote_rule_failure_uses_registered_message(engine, demo_data):
    demo_data["RemoteField"] = "other@x.com"
    report = engine.validate(demo_data)
    assert report.errors == {"RemoteField": [REMOTE_MESSAGE]}


def test_unregistered_remote_method_fails_with_generic_message(demo_ruleset, demo_data):
    engine = ValidationEngine(ruleset=demo_ruleset)
    report = engine.validate(demo_data)
    assert report.errors == {"RemoteField": ["Please fix this field."]}


def test_remote_predicate_errors_propagate(demo_ruleset, demo_data):
    def broken(value):
        raise RuntimeError("database down")

    engine = ValidationEngine(ruleset=demo_ruleset)
    engine.add_remote_rule("checkEmail", REMOTE_MESSAGE, broken)

    with pytest.raises(RuntimeError):
        engine.validate(demo_data)


def test_validate_without_ruleset_raises():
    with pytest.raises(RulesetNotConfiguredError):
        ValidationEngine().validate({"Name": "x"})


def test_ruleset_can_be_given_per_call():
    engine = ValidationEngine()
    report = engine.validate({"Name": ""}, json.dumps({"Name": {"required": True}}))
    assert not report.valid


def test_set_rule_file(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"Age": {"digits": True}}), encoding="utf-8")

    engine = ValidationEngine()
    engine.set_rule_file(path)

    assert not engine.is_valid({"Age": "forty"})


def test_core_only_catalog_skips_additional_rules():
    engine = ValidationEngine(catalog=RuleCatalog(["core"]), ruleset={"Name": {"lettersonly": True}})
    assert engine.is_valid({"Name": "R2-D2"})


def test_custom_messages():
    messages = MessageCatalog({"REQUIRED": "Needed."})
    engine = ValidationEngine(messages=messages, ruleset={"Name": {"required": True}})
    assert engine.validate({}).errors == {"Name": ["Needed."]}


def test_additional_demo_form(additional_ruleset):
    engine = ValidationEngine(ruleset=additional_ruleset)
    data = {
        "maxWordsField": "two words",
        "minWordsField": "two words",
        "rangeWordsField": "three whole words",
        "lettersonlyField": "letters",
        "letterswithbasicpuncField": "Letters, too.",
        "alphanumericField": "abc_123",
        "nowhitespaceField": "no-space",
        "integerField": "-7",
        "time24hField": "18:30",
        "time12hField": "6:30 PM",
        "phoneUSField": "212-555-1234",
        "phoneUKField": "01632 960123",
        "mobileUKField": "07700 900123",
        "postcodeField": "ec1a1bb",
        "strippedminlengthField": "<em>hello</em>",
    }

    report = engine.validate(data)

    assert report.valid, report.errors
    assert report.normalized == {"postcodeField": "EC1A 1BB"}


def test_error_label_rendering(engine, demo_data):
    demo_data["EmailField"] = "nope"
    report = engine.validate(demo_data)

    assert engine.render_field_error(report, "EmailField") == (
        '<label generated="true" for="EmailField" class="error">'
        "Please enter a valid email address.</label>"
    )
    assert engine.render_field_error(report, "RequiredField") == ""


def test_first_errors_for_the_client(engine, demo_data):
    demo_data.update(EmailField="nope", ConfirmEmailField="", MinField="abc")
    report = engine.validate(demo_data)

    assert report.first_errors() == {
        "EmailField": "Please enter a valid email address.",
        "ConfirmEmailField": "This field is required.",
        "MinField": "Please enter a value greater than or equal to 20.",
    }
    assert json.loads(report.jqv_errors_json()) == report.first_errors()


def test_field_errors(engine, demo_data):
    demo_data["DigitsField"] = "12a"
    report = engine.validate(demo_data)
    assert report.field_errors("DigitsField") == ["Please enter only digits."]
    assert report.field_errors("EmailField") == []
