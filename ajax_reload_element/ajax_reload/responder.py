# ajax_reload_element/ajax_reload/responder.py
"""
Answers ajax reload requests with the HTML of a single page element.

``on_get_page_layout`` runs on the ``get_page_layout`` hook, before the page
route renders anything. When the request is an ajax request carrying an
``ajax_reload_element`` parameter, the targeted module, content element or
article is rendered on its own and returned as JSON::

    {"status": "ok", "html": "..."}
    {"status": "error", "error_code": 1, "error": "..."}

Returning the response ends the request; the full page is never rendered.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from flask import current_app, jsonify, session
from flask_wtf.csrf import generate_csrf

from ..cms.context import get_render_context
from ..cms.environment import (
    Input,
    get_input,
    get_request,
    is_ajax_request,
    set_request,
    unset_query_parameter,
)
from ..cms.insert_tags import get_insert_tag_parser
from ..cms.template import get_script_tag_rewriter
from .elements import ELEMENT_KINDS, ElementKind, ReloadableElement, split_identifier
from .errors import (
    AjaxReloadError,
    ElementAjaxNotAllowed,
    ElementNotFound,
    ElementTypeUnknown,
)

PARAM = "ajax_reload_element"
GENERIC_PAGE_PARAM = "page"


def reload_identifier(inp: Input) -> Optional[str]:
    value = inp.get(PARAM)
    if value is None:
        value = inp.post(PARAM)
    return value


def on_get_page_layout(page, layout):
    if not is_ajax_request():
        return None
    identifier = reload_identifier(get_input())
    if identifier is None:
        return None
    return jsonify(render_fragment(page, layout, identifier))


# -------------------------------------------------------------------
# Fragment
# -------------------------------------------------------------------
def _strip_reload_parameter(inp: Input) -> None:
    # Keep the parameter out of URLs generated while rendering (pagination links etc.)
    set_request(unset_query_parameter(get_request(), PARAM))
    inp.set_get(PARAM, None)
    inp.set_post(PARAM, None)


def _apply_generic_page(inp: Input, kind: Optional[ElementKind], element_id: Optional[str]) -> None:
    generic_page = inp.get(GENERIC_PAGE_PARAM)
    if generic_page is None or kind is None:
        return
    param = kind.page_param(element_id)
    if inp.get(param) is None:
        inp.set_get(param, generic_page)


def post_process(html: str) -> str:
    html = get_insert_tag_parser().replace(html)

    # Tokens and escaped braces that survived the insert tag pass
    token = generate_csrf()
    html = html.replace("{{request_token}}", token).replace("[{]", "{{").replace("[}]", "}}")

    rewriter = get_script_tag_rewriter()
    if rewriter is not None:
        html = rewriter(html)
    return html


def resolve_element(
    identifier: str, kind: Optional[ElementKind], element_id: Optional[str]
) -> Tuple[ReloadableElement, Any]:
    """The validated element reference and its record; raises the reload errors."""
    if kind is None:
        raise ElementTypeUnknown()
    element = kind.lookup(element_id)
    if element is None:
        raise ElementNotFound(identifier)
    if not element.allow_ajax_reload:
        raise ElementAjaxNotAllowed(kind.label, element.id)
    return ReloadableElement(kind.tag, element.id), element


def render_fragment(
    page,
    layout,
    identifier: str,
    kinds: Mapping[str, ElementKind] = ELEMENT_KINDS,
) -> Dict[str, Any]:
    """Payload for one reload request; never raises for the three domain errors."""
    inp = get_input()
    kind_tag, element_id = split_identifier(identifier)
    kind = kinds.get(kind_tag)

    _strip_reload_parameter(inp)
    _apply_generic_page(inp, kind, element_id)

    try:
        target, element = resolve_element(identifier, kind, element_id)
    except AjaxReloadError as exc:
        current_app.logger.info("Ajax reload of %r refused: %s", identifier, exc.__class__.__name__)
        return exc.to_payload()

    # Stale login errors would otherwise show up in the reloaded element
    session.pop("LOGIN_ERROR", None)

    get_render_context().apply_layout(layout)

    html = post_process(kind.render(element))
    current_app.logger.debug("Ajax reload of %s on page %s", target, page.alias)
    return {"status": "ok", "html": html}
