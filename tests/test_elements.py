import pytest

from ajax_reload_element.ajax_reload.elements import (
    ELEMENT_KINDS,
    TYPE_ARTICLE,
    TYPE_CONTENT,
    TYPE_MODULE,
    ReloadableElement,
    split_identifier,
    validate_kinds,
)
from ajax_reload_element.ajax_reload.responder import resolve_element
from ajax_reload_element.ajax_reload.errors import ElementAjaxNotAllowed, ElementNotFound, error_message
from ajax_reload_element.models import MAX_RECORD_ID, Content, Module, parse_record_id


@pytest.mark.parametrize("value, expected", [
    ("mod::12", ("mod", "12")),
    (" ce :: 42 ", ("ce", "42")),
    ("art", ("art", None)),
    ("", ("", None)),
    ("mod::1::2", ("mod", "1")),
])
def test_split_identifier(value, expected):
    assert split_identifier(value) == expected


def test_reloadable_element_round_trip():
    element = ReloadableElement(TYPE_CONTENT, 42)
    assert str(element) == "ce::42"
    assert ReloadableElement.parse(str(element)) == element


@pytest.mark.parametrize("value", ["foo::1", "mod::", "mod::abc", "ce", "mod::\u00b2", "mod::99999999999999999999999"])
def test_reloadable_element_rejects_invalid(value):
    with pytest.raises(ValueError):
        ReloadableElement.parse(value)


def test_kind_map_is_exhaustive():
    validate_kinds(ELEMENT_KINDS)
    assert set(ELEMENT_KINDS) == {TYPE_MODULE, TYPE_CONTENT, TYPE_ARTICLE}


def test_validate_kinds_reports_missing_kind():
    partial = {k: v for k, v in ELEMENT_KINDS.items() if k != TYPE_ARTICLE}
    with pytest.raises(RuntimeError, match="art"):
        validate_kinds(partial)


@pytest.mark.parametrize("tag, expected", [
    (TYPE_MODULE, "page_n12"),
    (TYPE_CONTENT, "page_c12"),
    (TYPE_ARTICLE, "page_a12"),
])
def test_page_param(tag, expected):
    assert ELEMENT_KINDS[tag].page_param("12") == expected


def test_lookup(app, site):
    with app.app_context():
        assert isinstance(ELEMENT_KINDS[TYPE_MODULE].lookup(str(site.nav)), Module)
        assert isinstance(ELEMENT_KINDS[TYPE_CONTENT].lookup(str(site.text)), Content)
        assert ELEMENT_KINDS[TYPE_MODULE].lookup("9999") is None
        assert ELEMENT_KINDS[TYPE_MODULE].lookup("1; drop") is None
        assert ELEMENT_KINDS[TYPE_MODULE].lookup(None) is None
        assert ELEMENT_KINDS[TYPE_MODULE].lookup("\u00b2") is None
        assert ELEMENT_KINDS[TYPE_MODULE].lookup(str(2**63)) is None


def test_error_payloads(app):
    with app.test_request_context("/"):
        assert ElementNotFound("ce::5").to_payload() == {
            "status": "error",
            "error_code": 1,
            "error": 'The element "ce::5" could not be found.',
        }
        assert ElementAjaxNotAllowed("Article", 3).to_payload(locale="de")["error"] == (
            "Article ID 3 darf nicht per Ajax neu geladen werden."
        )


def test_unknown_locale_falls_back_to_english(app):
    with app.app_context():
        assert error_message(3, locale="fr") == "The element type is unknown."


@pytest.mark.parametrize("value, expected", [
    ("12", 12),
    ("007", 7),
    (str(MAX_RECORD_ID), MAX_RECORD_ID),
    (str(MAX_RECORD_ID + 1), None),
    ("²", None),
    ("٣", None),
    ("-1", None),
    (" 1", None),
    ("", None),
    (None, None),
])
def test_parse_record_id(value, expected):
    assert parse_record_id(value) == expected


def test_resolved_element_reference(app, site):
    with app.app_context():
        target, record = resolve_element(f"ce::{site.text}", ELEMENT_KINDS[TYPE_CONTENT], str(site.text))

    assert target == ReloadableElement(TYPE_CONTENT, site.text)
    assert str(target) == f"ce::{site.text}"
    assert record.id == site.text
