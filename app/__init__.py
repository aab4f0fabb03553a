"""Application factory for the calculator server."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Iterable

import yaml
from flask import Flask
from werkzeug.exceptions import HTTPException

from common.errors import AppError, InternalAppError, NotFoundAppError
from common.logging import get_logger, install_request_logging
from common.responses import fail, ok

from . import config as config_module
from .blueprints import register_plugin_blueprints

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"

logger = get_logger()


def _load_yaml_config(path: Path = CONFIG_PATH) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _discover_plugins(package: str = "plugins") -> Iterable[str]:
    """Yield import paths for all plugin packages."""

    package_path = Path(__file__).resolve().parent.parent / package
    if not package_path.exists():
        return []
    for module_info in pkgutil.iter_modules([str(package_path)]):
        if module_info.ispkg:
            yield f"{package}.{module_info.name}"


def _load_manifests() -> list[dict[str, str]]:
    manifests: list[dict[str, str]] = []
    for dotted in _discover_plugins():
        module = importlib.import_module(dotted)
        manifest = getattr(module, "manifest", None)
        if manifest:
            manifests.append(dict(manifest))
    manifests.sort(key=lambda item: item["title"].lower())
    return manifests


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_module.BaseConfig)

    yaml_config = _load_yaml_config(Path(app.config.get("CONFIG_PATH", CONFIG_PATH)))
    site_settings = yaml_config.get("site", {}) or {}
    plugin_settings = yaml_config.get("plugins", {}) or {}

    app.config["SITE_SETTINGS"] = site_settings
    # Each app gets its own copy so tests can override plugin settings safely.
    app.config["PLUGIN_SETTINGS"] = {name: dict(value or {}) for name, value in plugin_settings.items()}

    if config_name:
        config_obj = getattr(config_module, config_name, None)
        if config_obj:
            app.config.from_object(config_obj)

    register_plugin_blueprints(app)
    install_request_logging(app)

    @app.after_request
    def apply_response_headers(response):
        """Attach strict security headers to every outgoing response."""

        configured = app.config.get("RESPONSE_HEADERS", {})
        for header, value in configured.items():
            if header not in response.headers:
                response.headers[header] = value
        return response

    manifests = _load_manifests()
    for manifest in manifests:
        blueprint = manifest.get("blueprint")
        plugin_config = plugin_settings.get(blueprint, {}) if blueprint else {}
        if plugin_config and plugin_config.get("summary"):
            manifest["summary"] = plugin_config["summary"]
    app.config["PLUGIN_MANIFESTS"] = manifests

    @app.route("/")
    def home():
        return ok(
            {
                "site": app.config.get("SITE_SETTINGS", {}),
                "plugins": app.config.get("PLUGIN_MANIFESTS", []),
            }
        )

    @app.route("/health")
    def health():
        return ok({"status": "ok"})

    @app.errorhandler(AppError)
    def app_error(error: AppError):
        return fail(error)

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        if error.code == 404:
            return fail(NotFoundAppError(message="Resource not found"))
        return fail(
            AppError(
                message=error.description or error.name,
                code=error.name.lower().replace(" ", "_"),
                status_code=error.code or 500,
            )
        )

    @app.errorhandler(500)
    def server_error(error):  # pragma: no cover
        logger.exception("unhandled error", exc_info=getattr(error, "original_exception", error))
        return fail(InternalAppError(message="Internal server error"))

    return app


__all__ = ["create_app"]
