"""API routes for the Calculator plugin."""

from __future__ import annotations

from dataclasses import replace
from typing import Literal

from flask import Blueprint, Response, current_app, request
from pydantic import ConfigDict

from common.errors import CapacityAppError, NotFoundAppError, ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    BUTTON_TOKENS,
    KEY_BINDINGS,
    CalculatorSession,
    CalculatorSettings,
    EvaluationOutcome,
    SessionLimitError,
    SessionNotFoundError,
    SessionStore,
    evaluate_once,
    load_settings,
    token_for_key,
)

logger = get_logger(__name__)


class EvaluatePayload(SchemaModel):
    expression: str
    angle_unit: Literal["radian", "degree"] | None = None
    log_mode: Literal["faithful", "corrected"] | None = None


class PressPayload(SchemaModel):
    # Tokens are appended verbatim, so whitespace is kept.
    model_config = ConfigDict(str_strip_whitespace=False)

    token: str


class KeyPayload(SchemaModel):
    key: str


api_bp = Blueprint("calculator_api", __name__, url_prefix="/api/calculator")
_STORE_KEY = "calculator_sessions"


def _settings() -> CalculatorSettings:
    settings = current_app.config.get("PLUGIN_SETTINGS", {}).get("calculator", {})
    return load_settings(settings)


def _store() -> SessionStore:
    # One store per app, sized from that app's settings on first use.
    store = current_app.extensions.get(_STORE_KEY)
    if store is None:
        config = _settings()
        store = current_app.extensions.setdefault(
            _STORE_KEY,
            SessionStore(ttl=config.session_ttl, max_sessions=config.max_sessions),
        )
    return store


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="calculator.invalid_request",
            details=getattr(exc, "details", None),
        )
    )


def _session_not_found(exc: SessionNotFoundError) -> Response:
    return fail(NotFoundAppError(message=exc.args[0], code="calculator.session_not_found"))


def _state(session_id: str, session: CalculatorSession, outcome: EvaluationOutcome | None = None) -> dict:
    payload = {"session_id": session_id, **session.snapshot()}
    payload["outcome"] = outcome.to_dict() if outcome is not None else None
    return payload


@api_bp.get("/keypad")
def keypad() -> Response:
    return ok({"buttons": list(BUTTON_TOKENS), "keys": dict(KEY_BINDINGS)})


@api_bp.get("/settings")
def settings() -> Response:
    return ok(_settings().to_dict())


@api_bp.post("/evaluate")
def evaluate() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(EvaluatePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)

    config = _settings()
    engine = config.engine()
    if payload.angle_unit:
        engine = replace(engine, angle_unit=payload.angle_unit)
    outcome = evaluate_once(
        payload.expression,
        engine=engine,
        log_mode=payload.log_mode or config.log_mode,  # type: ignore[arg-type]
    )
    if outcome is None:
        return fail(ValidationAppError(message="Expression is required", code="calculator.empty_expression"))
    return ok(outcome.to_dict())


@api_bp.post("/sessions")
def create_session() -> Response:
    config = _settings()
    try:
        session_id, session = _store().create(config.new_session)
    except SessionLimitError as exc:
        logger.warning("session limit reached (%d)", config.max_sessions)
        return fail(CapacityAppError(message=str(exc), code="calculator.session_limit"))
    return ok(_state(session_id, session), status=201)


@api_bp.get("/sessions/<session_id>")
def get_session(session_id: str) -> Response:
    try:
        session = _store().get(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    return ok(_state(session_id, session))


@api_bp.delete("/sessions/<session_id>")
def delete_session(session_id: str) -> Response:
    try:
        _store().delete(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    return ok({"session_id": session_id, "deleted": True})


@api_bp.post("/sessions/<session_id>/press")
def press(session_id: str) -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(PressPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        session = _store().get(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    outcome = session.press(payload.token)
    return ok(_state(session_id, session, outcome))


@api_bp.post("/sessions/<session_id>/keys")
def key(session_id: str) -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(KeyPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        session = _store().get(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    token = token_for_key(payload.key)
    if token is None:
        return ok({**_state(session_id, session), "ignored": True})
    outcome = session.press(token)
    return ok({**_state(session_id, session, outcome), "ignored": False})


@api_bp.post("/sessions/<session_id>/history/<int:index>/restore")
def restore_history(session_id: str, index: int) -> Response:
    try:
        session = _store().get(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    try:
        session.restore(index)
    except IndexError as exc:
        return fail(NotFoundAppError(message=str(exc), code="calculator.history_not_found"))
    return ok(_state(session_id, session))


@api_bp.delete("/sessions/<session_id>/history")
def clear_history(session_id: str) -> Response:
    try:
        session = _store().get(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    session.clear_history()
    return ok(_state(session_id, session))


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "keypad",
    "settings",
    "evaluate",
    "create_session",
    "get_session",
    "delete_session",
    "press",
    "key",
    "restore_history",
    "clear_history",
]
