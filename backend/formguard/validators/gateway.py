"""Remote validation gateway — answers jQuery Validation ``remote`` requests.

The client sends one field at a time while the user types, together with a
``remoteMethod`` marker. The answer is ``true``, the remote method's failure
message, or ``false`` when no rule/method matches. No full-form walk happens.
"""

from typing import Any, Mapping, Optional, Union

import structlog

from formguard.validators.catalog import RuleCatalog
from formguard.validators.engine import RulesetLike, as_text
from formguard.validators.errors import RulesetNotConfiguredError
from formguard.validators.ruleset import Ruleset

logger = structlog.get_logger()

REMOTE_MARKER = "remoteMethod"

RemoteResponse = Union[bool, str]


class RemoteValidationGateway:
    """Single-field entry point sharing the engine's remote rules."""

    def __init__(self, catalog: RuleCatalog, ruleset: Optional[RulesetLike] = None):
        self.catalog = catalog
        self.ruleset = Ruleset.coerce(ruleset) if ruleset is not None else None

    @staticmethod
    def is_remote_request(data: Mapping[str, Any]) -> bool:
        return REMOTE_MARKER in data

    def handle(
        self,
        data: Mapping[str, Any],
        ruleset: Optional[RulesetLike] = None,
    ) -> Optional[RemoteResponse]:
        """Answer a remote request.

        Args:
            data: The request fields: ``remoteMethod`` plus the field being checked
            ruleset: Overrides the gateway's ruleset for this call

        Returns:
            True if the value passed, the registered message if it failed,
            False if no remote rule matched, or None if ``data`` is not a
            remote request at all.

        Raises:
            RulesetNotConfiguredError: no ruleset given and none configured
        """
        if not self.is_remote_request(data):
            return None

        rules = Ruleset.coerce(ruleset) if ruleset is not None else self.ruleset
        if rules is None:
            raise RulesetNotConfiguredError()

        # The method is read from the ruleset, not trusted from the request
        response: RemoteResponse = False
        for field_name, value in data.items():
            if field_name == REMOTE_MARKER or field_name not in rules:
                continue

            remote_rule = self.catalog.get_remote(rules.remote_method(field_name))
            if remote_rule is None:
                continue

            response = True if remote_rule.check(as_text(value)) else remote_rule.message
            logger.info(
                "remote_request_handled",
                field=field_name,
                method=remote_rule.name,
                passed=response is True,
            )

        return response
