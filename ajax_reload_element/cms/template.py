# ajax_reload_element/cms/template.py
from __future__ import annotations

from typing import Any, Callable, List, Optional

from flask import current_app, g, render_template
from markupsafe import escape

from . import hooks
from .context import get_render_context

BODY_PLACEHOLDER = "[[TL_BODY]]"


class FrontendTemplate:
    """
    A named template and the variables it is parsed with.

    Variables are reachable as attributes (``tpl.css_id``); unknown variables
    read as None so hook listeners can test flags without guarding.
    """

    def __init__(self, name: str, **data: Any):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_data", dict(data))

    @property
    def template_name(self) -> str:
        return self._name

    @property
    def data(self) -> dict:
        return self._data

    def __getattr__(self, key: str) -> Any:
        if key.startswith("_"):
            raise AttributeError(key)
        return self._data.get(key)

    def __setattr__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def candidates(self) -> List[str]:
        names = [f"{self._name}.html"]
        group = get_render_context().template_group
        if group:
            names.insert(0, f"{group.strip('/')}/{self._name}.html")
        return names

    def parse(self) -> str:
        hooks.trigger(hooks.PARSE_TEMPLATE, self)
        return render_template(self.candidates(), **self._data)

    def __repr__(self):
        return f"<FrontendTemplate {self._name}>"


# -------------------------
# Page body collection
# -------------------------
def _collection(key: str) -> List[str]:
    if key not in g:
        setattr(g, key, [])
    return getattr(g, key)


def add_to_body(html: str) -> None:
    _collection("cms_body").append(html)


def body_items() -> List[str]:
    return list(_collection("cms_body"))


# -------------------------
# Output post-processing
# -------------------------
def replace_dynamic_script_tags(html: str) -> str:
    return html.replace(BODY_PLACEHOLDER, "\n".join(body_items()))


def get_script_tag_rewriter() -> Optional[Callable[[str], str]]:
    """The placeholder rewriter, or None when the app has it switched off."""
    if not current_app.config.get("CMS_DYNAMIC_SCRIPT_TAGS", True):
        return None
    return replace_dynamic_script_tags


def restore_basic_entities(html: str) -> str:
    return html.replace("[{]", "{{").replace("[}]", "}}")


def css_id_attribute(css_id: Optional[str]) -> str:
    """Attribute string appended to an element's opening tag."""
    if not css_id:
        return ""
    return f' id="{escape(css_id)}"'
