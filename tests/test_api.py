"""Tests for the top-level orgstream API."""

from dataclasses import replace

import orgstream
from orgstream import (
    HTML_TAGS,
    EventStream,
    EventType,
    HtmlRenderer,
    Org,
    ParseConfig,
    Tag,
    parse,
    parse_config_context,
    parse_events,
    render,
)


class TestModule:
    def test_version(self) -> None:
        assert orgstream.__version__ == "0.1.0"

    def test_all_exports_exist(self) -> None:
        for name in orgstream.__all__:
            assert hasattr(orgstream, name), name


class TestParseEvents:
    def test_returns_stream(self) -> None:
        stream = parse_events("* TODO Write")
        assert isinstance(stream, EventStream)
        assert [event.type for event in stream] == [
            EventType.HEADLINE_START,
            EventType.HEADLINE_END,
        ]

    def test_config_captured(self) -> None:
        config = ParseConfig(entities=False)
        assert parse_events("x", config=config).config is config


class TestRender:
    def test_from_text(self) -> None:
        assert render("Some *bold* text") == "<p>Some <b>bold</b> text</p>\n"

    def test_from_bytes(self) -> None:
        assert render("Some *bold* text".encode()) == "<p>Some <b>bold</b> text</p>\n"

    def test_from_events(self) -> None:
        events = list(parse_events("* Hello"))
        assert render(events) == render("* Hello")

    def test_headline(self) -> None:
        assert render("* Hello") == (
            '<div id="outline-container-hello" class="outline-1">\n'
            '<h1 id="hello">Hello</h1>\n'
            "</div>\n"
        )

    def test_config(self) -> None:
        html = render("* NEXT Call", config=ParseConfig(todo_keywords=("NEXT",)))
        assert '<span class="todo NEXT">NEXT</span>' in html

    def test_mapping(self) -> None:
        mapping = replace(HTML_TAGS, paragraph=Tag("div", "para"))
        assert render("x", mapping=mapping) == '<div class="para">x</div>\n'


class TestParse:
    def test_tree(self) -> None:
        doc = parse("* Heading\n** Sub")
        assert doc.headlines[0].level == 1
        assert doc.headlines[0].children[0].title_text == "Sub"


class TestOrg:
    """The Org convenience class."""

    def test_call(self) -> None:
        assert Org()("Hello /World/") == "<p>Hello <i>World</i></p>\n"

    def test_config_used_everywhere(self) -> None:
        org = Org(ParseConfig(todo_keywords=("TODO", "NEXT")))
        assert org.parse("* NEXT Call").headlines[0].info.keyword == "NEXT"
        first = next(iter(org.events("* NEXT Call")))
        assert first.payload.keyword == "NEXT"
        assert "todo NEXT" in org.render("* NEXT Call")

    def test_captures_context_config(self) -> None:
        with parse_config_context(ParseConfig(todo_keywords=("WAIT",))):
            org = Org()
        assert org.config.todo_keywords == ("WAIT",)
        assert org.parse("* WAIT x").headlines[0].info.keyword == "WAIT"

    def test_independent_instances(self) -> None:
        plain = Org()
        custom = Org(ParseConfig(todo_keywords=("NEXT",)))
        assert plain.parse("* NEXT x").headlines[0].info.keyword is None
        assert custom.parse("* NEXT x").headlines[0].info.keyword == "NEXT"

    def test_render_events(self) -> None:
        org = Org()
        assert org.render(org.events("text")) == "<p>text</p>\n"

    def test_renderer_reuse(self) -> None:
        renderer = HtmlRenderer()
        renderer.render(parse_events("* A"))
        renderer.render(parse_events("* B"))
        assert [heading.text for heading in renderer.get_headings()] == ["B"]
