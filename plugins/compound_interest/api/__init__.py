"""API routes for the Compound Interest plugin."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request

from common.errors import ValidationAppError
from common.formatting import parse_grouped
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import CompoundSettings, load_settings


class SimulatePayload(SchemaModel):
    principal: str | int | None = None
    days: str | int | None = None
    rate: str | float | int | None = None


api_bp = Blueprint("compound_interest_api", __name__, url_prefix="/api/compound_interest")


def _settings() -> CompoundSettings:
    settings = current_app.config.get("PLUGIN_SETTINGS", {}).get("compound_interest", {})
    return load_settings(settings)


def _as_text(value: str | int | float | None) -> str:
    return "" if value is None else str(value)


@api_bp.get("/settings")
def settings() -> Response:
    return ok(_settings().to_dict())


@api_bp.post("/simulate")
def simulate_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(SimulatePayload, raw_payload)
    except ValidationError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                code="compound.invalid_request",
                details=getattr(exc, "details", None),
            )
        )

    config = _settings()
    days_text = _as_text(payload.days)
    raw_days = parse_grouped(days_text)
    if raw_days and int(raw_days) > config.max_days:
        return fail(
            ValidationAppError(
                message=f"days must be ≤ {config.max_days}",
                code="compound.days_limit",
                details={"max_days": config.max_days},
            )
        )

    form = config.new_form()
    accepted = {
        "principal": form.set_principal(_as_text(payload.principal)),
        "days": form.set_days(days_text),
        "rate": form.set_rate(_as_text(payload.rate)),
    }
    result = form.result()
    return ok(
        {
            "inputs": {
                "principal": form.principal.raw,
                "principal_display": form.principal_display,
                "days": form.days,
                "rate": form.rate,
            },
            "accepted": accepted,
            "row_cap": config.row_cap,
            "result": result.to_dict(),
        }
    )


blueprints = [api_bp]


__all__ = ["blueprints", "settings", "simulate_endpoint"]
