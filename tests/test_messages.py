import json

from formguard.validators.messages import (
    ADDITIONAL_MESSAGES,
    BASE_MESSAGES,
    DEFAULT_MESSAGE,
    MessageCatalog,
)


def test_scalar_params_fill_first_placeholder():
    catalog = MessageCatalog(BASE_MESSAGES)
    assert catalog.render("minlength", 6) == "Please enter at least 6 characters."


def test_array_params_fill_positionally():
    catalog = MessageCatalog(BASE_MESSAGES)
    assert catalog.render("RANGE", [0, 100]) == "Please enter a value between 0 and 100."


def test_lookup_ignores_case():
    catalog = MessageCatalog(BASE_MESSAGES)
    assert catalog.render("dateISO") == "Please enter a valid date (YYYY-MM-DD)."
    assert "equalTo" in catalog


def test_params_are_html_escaped():
    catalog = MessageCatalog(BASE_MESSAGES)
    assert catalog.render("maxlength", "<b>") == "Please enter no more than &lt;b&gt; characters."


def test_unknown_rule_gets_default_message():
    assert MessageCatalog(BASE_MESSAGES).render("nosuchrule", True) == DEFAULT_MESSAGE


def test_later_tables_override_earlier_ones():
    catalog = MessageCatalog(BASE_MESSAGES, ADDITIONAL_MESSAGES, {"required": "Required!"})
    assert catalog.render("required") == "Required!"
    assert catalog.render("lettersonly") == "Letters only please."
    # the module tables are untouched
    assert BASE_MESSAGES["REQUIRED"] == "This field is required."


def test_merged_with_returns_a_new_catalog():
    base = MessageCatalog(BASE_MESSAGES)
    extended = base.merged_with(ADDITIONAL_MESSAGES)
    assert "postcode" in extended
    assert "postcode" not in base


def test_from_file_layers_overrides(tmp_path):
    path = tmp_path / "messages.json"
    path.write_text(json.dumps({"EMAIL": "Bad email."}), encoding="utf-8")

    catalog = MessageCatalog.from_file(str(path))

    assert catalog.render("email") == "Bad email."
    assert catalog.render("required") == "This field is required."


def test_from_file_keeps_given_base_tables(tmp_path):
    path = tmp_path / "messages.json"
    path.write_text(json.dumps({"LETTERSONLY": "Only letters."}), encoding="utf-8")

    catalog = MessageCatalog.from_file(str(path), BASE_MESSAGES, ADDITIONAL_MESSAGES)

    assert catalog.render("lettersonly") == "Only letters."
    assert catalog.render("postcode") == "Please specify a valid postcode"
