# ajax_reload_element/cms/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from flask import current_app, g

DEFAULT_PAGE_TEMPLATE = "fe_page"
DOCTYPE_SEPARATOR = "_"


def split_doctype(doctype: Optional[str], separator: str = DOCTYPE_SEPARATOR) -> Tuple[Optional[str], Optional[str]]:
    """``"xhtml_strict"`` -> ``("xhtml", "strict")``; missing segments are None."""
    parts = (doctype or "").split(separator)
    output_format = parts[0] or None
    output_variant = (parts[1] or None) if len(parts) > 1 else None
    return output_format, output_variant


@dataclass
class RenderContext:
    """Per-request page state the element renderers read."""

    layout_id: Optional[int] = None
    template: str = DEFAULT_PAGE_TEMPLATE
    template_group: Optional[str] = None
    output_format: Optional[str] = None
    output_variant: Optional[str] = None
    default_densities: Optional[str] = None

    def apply_layout(self, layout) -> None:
        theme = getattr(layout, "theme", None)
        if theme is not None and theme.default_image_densities:
            self.default_densities = theme.default_image_densities

        self.layout_id = layout.id
        self.template = layout.template or current_app.config.get(
            "CMS_DEFAULT_PAGE_TEMPLATE", DEFAULT_PAGE_TEMPLATE
        )
        if theme is not None and theme.templates:
            self.template_group = theme.templates

        self.output_format, self.output_variant = split_doctype(
            layout.doctype,
            current_app.config.get("CMS_DOCTYPE_SEPARATOR", DOCTYPE_SEPARATOR),
        )


def get_render_context() -> RenderContext:
    if "cms_render_context" not in g:
        g.cms_render_context = RenderContext()
    return g.cms_render_context
