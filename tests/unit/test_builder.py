"""HTMLBuilder render tests."""

import pytest
from hypothesis import given, strategies as st
from structlog.testing import capture_logs

from core import ValidationError
from htmlbuilder import Document, EventRegistry, GrammarError, HTMLBuilder, parse_line


def tags(elements):
    return [el.tag for el in elements]


class TestRenderStructure:
    """Test tree reconstruction through render()."""

    def test_siblings_keep_document_order(self, builder, document):
        """div > [span(Hello), span(World)]"""
        builder.render("div\n>span(Hello)\n>span(World)")

        (div,) = document.body.children
        assert tags(div.children) == ["span", "span"]
        assert [s.text_content for s in div.children] == ["Hello", "World"]

    def test_nested_child_attaches_to_nearest_parent(self, builder, document):
        """ul > [li(A) > li(B), li(C)]"""
        builder.render("ul\n>li(A)\n>>li(B)\n>li(C)")

        (ul,) = document.body.children
        a, c = ul.children
        assert a.child_nodes[0].data == "A"
        assert [li.text_content for li in a.children] == ["B"]
        assert c.text_content == "C"
        assert ul.to_html() == "<ul><li>A<li>B</li></li><li>C</li></ul>"

    def test_multiple_main_elements(self, builder, document, sample_template):
        builder.render(sample_template)

        nav, footer = document.body.children
        assert nav.id == "main"
        assert nav.class_list.contains("menu")
        assert tags(nav.children) == ["ul", "p"]
        ul = nav.children[0]
        assert [li.text_content for li in ul.children] == ["Home", "About & Contact"]
        assert ul.children[0].get_attribute("data-page") == "home"
        assert footer.child_nodes == []

    def test_deep_nesting(self, builder, document):
        builder.render("a\n>b\n>>c\n>>>d\n>>>>e\n>>f\n>g")

        (a,) = document.body.children
        b, g = a.children
        c, f = b.children
        assert tags([c, f, g]) == ["c", "f", "g"]
        assert c.children[0].tag == "d"
        assert c.children[0].children[0].tag == "e"

    def test_level_jump_attaches_after_shallower_siblings(self, builder, document):
        """b has no level-2 predecessor: it goes to div, after a and c."""
        builder.render("div\n>a\n>>>b\n>c")

        (div,) = document.body.children
        assert tags(div.children) == ["a", "c", "b"]
        assert div.children[0].children == []

    def test_empty_template_is_a_noop(self, builder, document, registry):
        registry.bind(name="kept", type="click", callback=lambda: None)
        builder.render("  \n \n", events=registry)

        assert document.body.child_nodes == []
        assert registry.find("kept") is not None

    def test_renders_append_after_existing_children(self, builder, document):
        builder.render("first")
        builder.render("second\nthird")
        assert tags(document.body.children) == ["first", "second", "third"]

    def test_set_parent(self, builder, document):
        builder.render("section#target")
        target = document.query_selector("#target")

        builder.set_parent(target)
        builder.render("p(inside)")

        assert target.children[0].text_content == "inside"

    def test_default_parent_is_a_document_body(self):
        builder = HTMLBuilder()
        assert builder.parent.tag == "body"
        assert isinstance(builder.parent.parent, Document)

    def test_id_overrides_id_attribute(self, builder, document):
        builder.render("div#real[id=fake;role=menu]")
        (div,) = document.body.children
        assert div.id == "real"
        assert div.get_attribute("role") == "menu"

    def test_content_is_entity_decoded_text(self, builder, document):
        builder.render("p(Tom &amp; Jerry &lt;3)")
        (p,) = document.body.children
        assert p.text_content == "Tom & Jerry <3"
        assert p.to_html() == "<p>Tom &amp; Jerry &lt;3</p>"

    def test_same_template_yields_identical_trees(self, sample_template):
        """Rendering twice into two empty parents is structurally identical."""
        first, second = Document(), Document()
        HTMLBuilder(first.body).render(sample_template)
        HTMLBuilder(second.body).render(sample_template)

        assert first.body.to_dict() == second.body.to_dict()
        assert first.body.to_json() == second.body.to_json()


class TestRenderErrors:
    """Test failure semantics."""

    def test_grammar_error_keeps_previous_main_elements(self, builder, document, registry):
        registry.bind(name="go", type="click", callback=lambda: None)

        with pytest.raises(GrammarError):
            builder.render("div\n>span\nsection\n>(bad)", events=registry)

        assert tags(document.body.children) == ["div"]
        assert len(registry) == 0

    def test_invalid_tokens_do_not_stop_render(self, builder, document):
        with capture_logs() as logs:
            builder.render("div.1bad.ok\n>span[2x=1;title=t]")

        (div,) = document.body.children
        assert list(div.class_list) == ["ok"]
        assert div.children[0].attributes == {"title": "t"}
        assert len([e for e in logs if e["event"] == "invalid_token"]) == 2


class TestRenderEvents:
    """Test event resolution during render."""

    def test_bound_event_is_attached_and_registry_cleared(self, builder, document):
        calls = []
        builder.bind_event(name="onclick", type="click", callback=lambda e: calls.append(e.type))

        builder.render("button(Go)@click")
        (button,) = document.body.children
        button.click()

        assert calls == ["click"]
        assert len(builder.events) == 0

    def test_zero_argument_callback(self, builder, document):
        calls = []
        builder.bind_event({"name": "ping", "type": "click", "callback": lambda: calls.append("ping")})

        builder.render("div\n>button@ping")
        document.body.children[0].children[0].click()

        assert calls == ["ping"]

    def test_unresolved_event_is_ignored(self, builder, document):
        builder.render("button@nobody")
        (button,) = document.body.children
        assert button.listener_count("click") == 0
        button.click()

    def test_explicit_registry_is_consumed(self, builder, document):
        """A render-scoped registry is cleared; the builder's own is untouched."""
        scoped = EventRegistry()
        scoped.bind(name="save", type="click", callback=lambda: None)
        builder.bind_event(name="other", type="click", callback=lambda: None)

        builder.render("button@save", events=scoped)

        assert document.body.children[0].listener_count("click") == 1
        assert len(scoped) == 0
        assert builder.events.names() == ["other"]

    def test_once_option(self, builder, document):
        calls = []
        builder.bind_event(name="first", type="click", callback=lambda: calls.append(1), options={"once": True})
        builder.render("button@first")

        button = document.body.children[0]
        button.click()
        button.click()

        assert calls == [1]

    def test_clear_events(self, builder):
        builder.bind_event(name="a", type="click", callback=lambda: None)
        builder.clear_events()
        builder.clear_events()
        assert len(builder.events) == 0


class TestConfiguration:
    """Test delimiter and indentation helpers."""

    def test_change_attribute_delimiter(self, builder, document):
        builder.change_attribute_delimiter("/")
        builder.render("a[href=/x;y / title=t]")

        (a,) = document.body.children
        assert a.attributes == {"href": "/x;y", "title": "t"}

    def test_change_attribute_delimiter_rejects_empty(self, builder):
        with pytest.raises(ValidationError):
            builder.change_attribute_delimiter("")

    def test_delimiter_from_settings(self, monkeypatch):
        monkeypatch.setenv("HTMLBUILDER_ATTRIBUTE_DELIMITER", "|")
        builder = HTMLBuilder()
        assert builder.parser.delimiter == "|"

    def test_indent_template_composes(self, builder, document):
        item = "li\n>span(x)"
        builder.render("ul\n" + builder.indent_template(item))

        (ul,) = document.body.children
        assert ul.children[0].children[0].text_content == "x"

    def test_create_element(self, builder):
        element = builder.create_element(parse_line("img.icon#logo[src=a.png;alt]"))
        assert element.to_html() == '<img class="icon" src="a.png" alt id="logo"></img>'


@given(st.lists(st.sampled_from(["div", "span", "p", "li", "section"]), min_size=1, max_size=12))
def test_main_lines_append_in_order(main_tags):
    """Property test: a flat template appends one element per line, in order."""
    document = Document()
    HTMLBuilder(document.body).render("\n".join(main_tags))
    assert tags(document.body.children) == main_tags
