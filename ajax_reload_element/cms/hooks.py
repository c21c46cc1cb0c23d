# ajax_reload_element/cms/hooks.py
"""
Named hook points fired by the page pipeline.

Listeners are stored per application in ``app.extensions["cms_hooks"]`` and
called in registration order. ``trigger`` returns the first non-None value a
listener produces and skips the remaining listeners; the page route uses this
to let a ``get_page_layout`` listener answer the request on its own.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from flask import Flask, current_app

PARSE_TEMPLATE = "parse_template"      # listener(template)
GET_PAGE_LAYOUT = "get_page_layout"    # listener(page, layout) -> Optional[Response]


def _registry(app: Flask) -> Dict[str, List[Callable[..., Any]]]:
    return app.extensions.setdefault("cms_hooks", {})


def register(app: Flask, name: str, callback: Callable[..., Any]) -> None:
    _registry(app).setdefault(name, []).append(callback)


def _listeners(name: str) -> List[Callable[..., Any]]:
    return list(_registry(current_app).get(name, []))


def trigger(name: str, *args: Any) -> Optional[Any]:
    for callback in _listeners(name):
        result = callback(*args)
        if result is not None:
            return result
    return None
