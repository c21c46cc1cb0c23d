# ajax_reload_element/cms/insert_tags.py
"""
Insert tags: ``{{name::argument|flag}}`` markers resolved after rendering.

Literal braces that must survive this pass are written as ``[{]`` and ``[}]``
and restored afterwards by ``restore_basic_entities``.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, Dict, Optional
from urllib.parse import quote

from flask import current_app, g, request, url_for
from flask_wtf.csrf import generate_csrf

from .. import models
from ..extensions import db
from .environment import get_request

TAG_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")

FLAGS: Dict[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
    "urlencode": lambda value: quote(value, safe=""),
}

Handler = Callable[[str], Optional[str]]


class InsertTagParser:
    def __init__(self):
        self._handlers: Dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> None:
        self._handlers[name.lower()] = handler

    def replace(self, text: str) -> str:
        if not text or "{{" not in text:
            return text
        return TAG_PATTERN.sub(self._replace_match, text)

    def _replace_match(self, match: "re.Match[str]") -> str:
        tag, *flags = match.group(1).strip().split("|")
        name, _, argument = tag.partition("::")
        handler = self._handlers.get(name.strip().lower())
        if handler is None:
            current_app.logger.debug("Unknown insert tag left in output: %s", match.group(0))
            return match.group(0)

        value = handler(argument.strip())
        value = "" if value is None else str(value)
        for flag in flags:
            fn = FLAGS.get(flag.strip().lower())
            if fn is not None:
                value = fn(value)
        return value


# -------------------------
# Built-in tags
# -------------------------
def _request_token(_arg: str) -> str:
    return generate_csrf()


def _env(arg: str) -> Optional[str]:
    key = arg.lower()
    if key == "request":
        return get_request()
    if key == "path":
        return request.path
    if key == "host":
        return request.host
    if key == "url":
        return request.host_url.rstrip("/")
    return None


def _page(arg: str) -> Optional[str]:
    page = g.get("cms_page")
    if page is None or not arg:
        return None
    if arg not in {"id", "alias", "title"}:
        return None
    return getattr(page, arg)


def _link_url(arg: str) -> Optional[str]:
    page_id = models.parse_record_id(arg)
    if page_id is not None:
        page = db.session.get(models.Page, page_id)
    else:
        page = models.Page.query.filter_by(alias=arg).first()
    if page is None:
        return None
    return url_for("cms.page", alias=page.alias)


def _date(arg: str) -> str:
    fmt = arg or current_app.config.get("CMS_DATE_FORMAT", "%Y-%m-%d")
    return datetime.now().strftime(fmt)


def _insert_record(model_name: str, render_name: str) -> Handler:
    def _handler(arg: str) -> Optional[str]:
        from . import renderers

        record_id = models.parse_record_id(arg)
        if record_id is None:
            return None
        record = db.session.get(getattr(models, model_name), record_id)
        if record is None:
            return None
        return getattr(renderers, render_name)(record)

    return _handler


def create_parser() -> InsertTagParser:
    parser = InsertTagParser()
    parser.register("request_token", _request_token)
    parser.register("env", _env)
    parser.register("page", _page)
    parser.register("link_url", _link_url)
    parser.register("date", _date)
    parser.register("insert_module", _insert_record("Module", "get_frontend_module"))
    parser.register("insert_content", _insert_record("Content", "get_content_element"))
    parser.register("insert_article", _insert_record("Article", "get_article"))
    return parser


def get_insert_tag_parser() -> InsertTagParser:
    return current_app.extensions["cms_insert_tags"]
