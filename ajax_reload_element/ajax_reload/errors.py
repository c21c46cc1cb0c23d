# ajax_reload_element/ajax_reload/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from flask import current_app, has_request_context, request

ERROR_ELEMENT_NOT_FOUND = 1
ERROR_ELEMENT_AJAX_NOT_ALLOWED = 2
ERROR_ELEMENT_TYPE_UNKNOWN = 3

# -------------------------------------------------------------------
# Messages, keyed by language then error code; %-interpolated
# -------------------------------------------------------------------
MESSAGES: Dict[str, Dict[int, str]] = {
    "en": {
        ERROR_ELEMENT_NOT_FOUND: 'The element "%s" could not be found.',
        ERROR_ELEMENT_AJAX_NOT_ALLOWED: "%s ID %s does not allow to be reloaded via ajax.",
        ERROR_ELEMENT_TYPE_UNKNOWN: "The element type is unknown.",
    },
    "de": {
        ERROR_ELEMENT_NOT_FOUND: 'Das Element "%s" wurde nicht gefunden.',
        ERROR_ELEMENT_AJAX_NOT_ALLOWED: "%s ID %s darf nicht per Ajax neu geladen werden.",
        ERROR_ELEMENT_TYPE_UNKNOWN: "Der Elementtyp ist unbekannt.",
    },
}


def get_locale() -> str:
    default = current_app.config.get("AJAX_RELOAD_DEFAULT_LANGUAGE", "en")
    if not has_request_context():
        return default
    languages = current_app.config.get("LANGUAGES") or list(MESSAGES)
    return request.accept_languages.best_match(languages) or default


def error_message(code: int, args: Tuple[Any, ...] = (), locale: Optional[str] = None) -> str:
    locale = locale or get_locale()
    table = MESSAGES.get(locale) or MESSAGES["en"]
    template = table.get(code) or MESSAGES["en"][code]
    return template % args if args else template


# -------------------------------------------------------------------
# Exceptions
# -------------------------------------------------------------------
class AjaxReloadError(Exception):
    """Base class for a reload request that ends in a JSON error payload."""

    code: int = 0

    def __init__(self, *args: Any):
        super().__init__(*args)
        self.message_args = args

    def to_payload(self, locale: Optional[str] = None) -> Dict[str, Any]:
        return {
            "status": "error",
            "error_code": self.code,
            "error": error_message(self.code, self.message_args, locale),
        }


class ElementNotFound(AjaxReloadError):
    """No record exists for the requested kind and id. Args: raw identifier."""

    code = ERROR_ELEMENT_NOT_FOUND


class ElementAjaxNotAllowed(AjaxReloadError):
    """The record exists but is not flagged for reloading. Args: type name, id."""

    code = ERROR_ELEMENT_AJAX_NOT_ALLOWED


class ElementTypeUnknown(AjaxReloadError):
    code = ERROR_ELEMENT_TYPE_UNKNOWN
