# ajax_reload_element/cms/environment.py
from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from flask import current_app, g, request
from werkzeug.datastructures import MultiDict


# -------------------------
# Request helpers
# -------------------------
def is_ajax_request() -> bool:
    allowed = current_app.config.get("CMS_AJAX_HEADER_VALUES") or ()
    return request.headers.get("X-Requested-With") in set(allowed)


def get_request() -> str:
    """Current request path plus query string, without the leading slash."""
    if "cms_request" not in g:
        qs = request.query_string.decode("utf-8", "replace")
        path = request.path.lstrip("/")
        g.cms_request = f"{path}?{qs}" if qs else path
    return g.cms_request


def set_request(value: str) -> None:
    g.cms_request = value


# -------------------------
# Input
# -------------------------
class Input:
    """
    Mutable view over the parameters of the current request.

    Flask's ``request.args`` and ``request.form`` are immutable; renderers read
    parameters through this object so hook listeners can add or remove them
    before rendering.
    """

    def __init__(self, args: MultiDict, form: MultiDict):
        self._get = MultiDict(args)
        self._post = MultiDict(form)

    def get(self, name: str) -> Optional[str]:
        return self._get.get(name)

    def post(self, name: str) -> Optional[str]:
        return self._post.get(name)

    def set_get(self, name: str, value: Optional[str]) -> None:
        if value is None:
            self._get.pop(name, None)
        else:
            self._get[name] = value

    def set_post(self, name: str, value: Optional[str]) -> None:
        if value is None:
            self._post.pop(name, None)
        else:
            self._post[name] = value


def get_input() -> Input:
    if "cms_input" not in g:
        g.cms_input = Input(request.args, request.form)
    return g.cms_input


# -------------------------
# URL builder
# -------------------------
def set_query_parameter(url: str, name: str, value) -> str:
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != name]
    query.append((name, str(value)))
    return urlunsplit(parts._replace(query=urlencode(query)))


def unset_query_parameter(url: str, name: str) -> str:
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != name]
    return urlunsplit(parts._replace(query=urlencode(query)))
