from types import SimpleNamespace

import pytest
from werkzeug.datastructures import MultiDict

from ajax_reload_element.cms import hooks
from ajax_reload_element.cms.context import RenderContext, get_render_context, split_doctype
from ajax_reload_element.cms.environment import (
    Input,
    get_request,
    set_query_parameter,
    unset_query_parameter,
)
from ajax_reload_element.cms.insert_tags import InsertTagParser, get_insert_tag_parser
from ajax_reload_element.cms.template import FrontendTemplate, replace_dynamic_script_tags, add_to_body


@pytest.mark.parametrize("doctype, expected", [
    ("html5", ("html5", None)),
    ("xhtml_strict", ("xhtml", "strict")),
    ("xhtml_transitional_extra", ("xhtml", "transitional")),
    ("", (None, None)),
    (None, (None, None)),
])
def test_split_doctype(doctype, expected):
    assert split_doctype(doctype) == expected


class TestRenderContext:
    def _layout(self, template=None, doctype="html5", templates=None, densities=None):
        theme = SimpleNamespace(templates=templates, default_image_densities=densities)
        return SimpleNamespace(id=3, template=template, doctype=doctype, theme=theme)

    def test_defaults_from_layout(self, app):
        with app.app_context():
            ctx = RenderContext()
            ctx.apply_layout(self._layout(doctype="xhtml_strict"))

        assert ctx.layout_id == 3
        assert ctx.template == "fe_page"
        assert ctx.template_group is None
        assert ctx.default_densities is None
        assert (ctx.output_format, ctx.output_variant) == ("xhtml", "strict")

    def test_theme_values(self, app):
        with app.app_context():
            ctx = RenderContext()
            ctx.apply_layout(self._layout(template="fe_wide", templates="themes/dark", densities="1x, 2x"))

        assert ctx.template == "fe_wide"
        assert ctx.template_group == "themes/dark"
        assert ctx.default_densities == "1x, 2x"

    def test_template_group_is_searched_first(self, app):
        with app.test_request_context("/"):
            get_render_context().template_group = "themes/dark/"
            assert FrontendTemplate("mod_html").candidates() == ["themes/dark/mod_html.html", "mod_html.html"]


class TestUrlBuilder:
    def test_unset(self):
        assert unset_query_parameter("news?a=1&ajax_reload_element=mod%3A%3A3&b=2", "ajax_reload_element") == "news?a=1&b=2"

    def test_unset_last_parameter(self):
        assert unset_query_parameter("news?ajax_reload_element=x", "ajax_reload_element") == "news"

    def test_set_replaces_existing(self):
        assert set_query_parameter("news?page_n3=1&a=b", "page_n3", 2) == "news?a=b&page_n3=2"

    def test_request_representation(self, app):
        with app.test_request_context("/news?x=1"):
            assert get_request() == "news?x=1"


def test_input_overlay():
    inp = Input(MultiDict({"a": "1", "page": "2"}), MultiDict({"b": "3"}))
    inp.set_get("a", None)
    inp.set_get("page_n4", "2")
    inp.set_post("b", None)

    assert inp.get("a") is None
    assert inp.get("page_n4") == "2"
    assert inp.post("b") is None


class TestInsertTags:
    def test_unknown_tag_is_kept(self, app):
        with app.test_request_context("/"):
            assert InsertTagParser().replace("x {{nope::1}} y") == "x {{nope::1}} y"

    def test_handler_and_flags(self, app):
        parser = InsertTagParser()
        parser.register("greet", lambda arg: f"hello {arg}")
        with app.test_request_context("/"):
            assert parser.replace("{{greet::world|upper}}") == "HELLO WORLD"
            assert parser.replace("{{ greet::a b|urlencode }}") == "hello%20a%20b"

    def test_escaped_braces_are_not_tags(self, app):
        with app.test_request_context("/"):
            assert get_insert_tag_parser().replace("[{]request_token[}]") == "[{]request_token[}]"

    def test_env_and_link_tags(self, app, site):
        with app.test_request_context("/index?q=1"):
            parser = get_insert_tag_parser()
            assert parser.replace("{{env::request}}") == "index?q=1"
            assert parser.replace(f"{{{{link_url::{site.page}}}}}") == "/index"
            assert parser.replace("{{link_url::missing}}") == ""

    def test_insert_content(self, app, site):
        with app.test_request_context("/"):
            html = get_insert_tag_parser().replace(f"{{{{insert_content::{site.text}}}}}")
        assert "Text body" in html

    @pytest.mark.parametrize("arg", ["\u00b2", "99999999999999999999999"])
    def test_unusable_record_ids_render_nothing(self, app, site, arg):
        with app.test_request_context("/"):
            assert get_insert_tag_parser().replace(f"{{{{insert_content::{arg}}}}}") == ""
            assert get_insert_tag_parser().replace(f"{{{{link_url::{arg}}}}}") == ""


def test_trigger_returns_first_result(app):
    calls = []
    hooks.register(app, "probe", lambda: calls.append("a"))
    hooks.register(app, "probe", lambda: "b")
    hooks.register(app, "probe", lambda: calls.append("c"))

    with app.app_context():
        assert hooks.trigger("probe") == "b"
    assert calls == ["a"]


def test_dynamic_script_tags(app):
    with app.test_request_context("/"):
        add_to_body("<script>1</script>")
        assert replace_dynamic_script_tags("<body>[[TL_BODY]]</body>") == "<body><script>1</script></body>"
