"""Validator exceptions.

Rule failures are never raised; they are recorded in the ValidationReport.
Only configuration problems surface as exceptions.
"""


class FormguardError(Exception):
    """Base exception for the validation package."""

    code = "formguard_error"


class ConfigurationError(FormguardError):
    """The engine was asked to do something it is not configured for."""

    code = "configuration_error"


class RulesetNotConfiguredError(ConfigurationError):
    """validate() was called before any ruleset was set."""

    code = "ruleset_not_configured"

    def __init__(self, message: str = "No ruleset defined."):
        super().__init__(message)


class RulesetFormatError(FormguardError):
    """A ruleset document is not an object of field -> {rule: params} objects."""

    code = "ruleset_invalid"


class InvalidDatasetError(FormguardError):
    """A request body that is not an object of field values."""

    code = "invalid_dataset"
