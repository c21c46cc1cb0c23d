# ajax_reload_element/ajax_reload/elements.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Type

from ..cms import renderers
from ..extensions import db
from ..models import Article, Content, Module, parse_record_id

TYPE_MODULE = "mod"
TYPE_CONTENT = "ce"
TYPE_ARTICLE = "art"

SEPARATOR = "::"


def split_identifier(value: str) -> Tuple[str, Optional[str]]:
    """``" ce :: 42 "`` -> ``("ce", "42")``; a missing id segment is None."""
    parts = [p.strip() for p in (value or "").split(SEPARATOR)]
    kind = parts[0]
    element_id = parts[1] if len(parts) > 1 else None
    return kind, element_id


@dataclass(frozen=True)
class ReloadableElement:
    kind: str
    id: int

    def __str__(self) -> str:
        return f"{self.kind}{SEPARATOR}{self.id}"

    @classmethod
    def parse(cls, value: str) -> "ReloadableElement":
        kind, element_id = split_identifier(value)
        if kind not in ELEMENT_KINDS:
            raise ValueError(f"unknown element kind {kind!r}")
        record_id = parse_record_id(element_id)
        if record_id is None:
            raise ValueError(f"invalid element id in {value!r}")
        return cls(kind, record_id)


# -------------------------------------------------------------------
# Kind -> lookup/render strategy
# -------------------------------------------------------------------
@dataclass(frozen=True)
class ElementKind:
    tag: str
    label: str                      # display name used in error messages
    model: Type[db.Model]
    render: Callable[..., str]
    page_param_prefix: str

    def lookup(self, element_id: Optional[str]):
        record_id = parse_record_id(element_id)
        if record_id is None:
            return None
        return db.session.get(self.model, record_id)

    def page_param(self, element_id: Optional[str]) -> str:
        return f"{self.page_param_prefix}{element_id or ''}"


ELEMENT_KINDS: Dict[str, ElementKind] = {
    TYPE_MODULE: ElementKind(TYPE_MODULE, "Module", Module, renderers.get_frontend_module, "page_n"),
    TYPE_CONTENT: ElementKind(TYPE_CONTENT, "Content", Content, renderers.get_content_element, "page_c"),
    TYPE_ARTICLE: ElementKind(TYPE_ARTICLE, "Article", Article, renderers.get_article, "page_a"),
}


def validate_kinds(kinds: Mapping[str, ElementKind]) -> None:
    required = {TYPE_MODULE, TYPE_CONTENT, TYPE_ARTICLE}
    missing = required - set(kinds)
    if missing:
        raise RuntimeError(f"No reload strategy for element kind(s): {', '.join(sorted(missing))}")
    for tag, kind in kinds.items():
        if kind.tag != tag:
            raise RuntimeError(f"Reload strategy registered as {tag!r} is tagged {kind.tag!r}")


def classify_template(template, content_tables: Iterable[str]) -> str:
    """Element kind of a parsed template, judged by the variables it carries."""
    if template.type == "article":
        return TYPE_ARTICLE
    if template.ptable in set(content_tables):
        return TYPE_CONTENT
    return TYPE_MODULE
