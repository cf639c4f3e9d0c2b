"""Validation API — full-form validation, remote checks, and the shared ruleset."""

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

import structlog

from formguard.models.responses import RulesResponse, ValidationResponse
from formguard.validators.errors import InvalidDatasetError, RulesetNotConfiguredError

logger = structlog.get_logger()

router = APIRouter()


async def _read_dataset(request: Request) -> dict[str, Any]:
    """Field values from the query string (GET), a JSON object, or a form body."""
    if request.method == "GET":
        return dict(request.query_params)

    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError as e:
            raise InvalidDatasetError(f"Request body is not valid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise InvalidDatasetError("Request body must be a JSON object of field values")
        return payload

    form = await request.form()
    # File inputs are validated by name (e.g. the extension rule)
    return {
        name: value if isinstance(value, str) else (value.filename or "")
        for name, value in form.items()
    }


# ─── Endpoints ───


@router.post("/validate", response_model=ValidationResponse)
async def validate_form(request: Request):
    """Validate a submitted form against the loaded ruleset."""
    engine = request.app.state.engine
    data = await _read_dataset(request)

    # Remote predicates may block (database lookups), keep them off the event loop
    report = await run_in_threadpool(engine.validate, data)

    return ValidationResponse(
        valid=report.valid,
        errors=report.errors,
        normalized=report.normalized,
    )


@router.api_route("/remote", methods=["GET", "POST"])
async def remote_check(request: Request):
    """jQuery Validation ``remote`` endpoint.

    The body is the bare JSON value the client expects: ``true``, ``false``,
    or the failure message.
    """
    engine = request.app.state.engine
    gateway = request.app.state.gateway
    data = await _read_dataset(request)

    if not gateway.is_remote_request(data):
        raise HTTPException(status_code=400, detail="Missing 'remoteMethod' in request")

    response = await run_in_threadpool(gateway.handle, data, engine.ruleset)
    return JSONResponse(content=response)


@router.get("/ruleset")
async def get_ruleset(request: Request):
    """The loaded ruleset, in the format the client validator takes as ``rules``."""
    ruleset = request.app.state.engine.ruleset
    if ruleset is None:
        raise RulesetNotConfiguredError()
    return ruleset.to_dict()


@router.get("/rules", response_model=RulesResponse)
async def list_rules(request: Request):
    """Rules and remote methods this server knows."""
    engine = request.app.state.engine
    ruleset = engine.ruleset

    return RulesResponse(
        rule_sets=list(engine.catalog.rule_sets),
        rules=engine.catalog.names(),
        remote_methods=engine.catalog.remote_names(),
        ruleset_fields=list(ruleset) if ruleset is not None else [],
    )
