"""Tests for HtmlRenderer."""

from __future__ import annotations

from dataclasses import replace

import pytest

from orgstream import parse_events, render
from orgstream.errors import RenderError
from orgstream.events import Event, EventType
from orgstream.nodes import InlineKind
from orgstream.renderers import HTML_TAGS, EventRenderer, HeadingInfo, HtmlRenderer, Tag, TagMapping


def html(source: str) -> str:
    return render(source)


class TestHeadlines:
    """Headline and section output."""

    def test_headline(self) -> None:
        assert html("* Hello") == (
            '<div id="outline-container-hello" class="outline-1">\n'
            '<h1 id="hello">Hello</h1>\n'
            "</div>\n"
        )

    def test_section_wrapper(self) -> None:
        assert html("* Intro\nSome text") == (
            '<div id="outline-container-intro" class="outline-1">\n'
            '<h1 id="intro">Intro</h1>\n'
            '<div id="text-intro" class="outline-text-1">\n'
            "<p>Some text</p>\n"
            "</div>\n"
            "</div>\n"
        )

    def test_preamble_has_no_wrapper(self) -> None:
        assert html("intro\n* A").startswith("<p>intro</p>\n<div")

    def test_nested_headline_inside_section(self) -> None:
        result = html("* A\n** B")
        assert result == (
            '<div id="outline-container-a" class="outline-1">\n'
            '<h1 id="a">A</h1>\n'
            '<div id="text-a" class="outline-text-1">\n'
            '<div id="outline-container-b" class="outline-2">\n'
            '<h2 id="b">B</h2>\n'
            "</div>\n"
            "</div>\n"
            "</div>\n"
        )

    def test_keyword_priority_and_tags(self) -> None:
        result = html("* TODO [#A] Task :work:urgent:")
        assert '<span class="todo TODO">TODO</span> ' in result
        assert '<span class="priority">[A]</span> ' in result
        assert (
            '&#xa0;&#xa0;&#xa0;<span class="tag"><span class="work">work</span>'
            '&#xa0;<span class="urgent">urgent</span></span>'
        ) in result

    def test_done_keyword(self) -> None:
        assert '<span class="done DONE">DONE</span>' in html("* DONE Task")

    def test_title_markup(self) -> None:
        assert '<h1 id="hello-world">Hello <b>World</b></h1>' in html("* Hello *World*")

    def test_unique_slugs(self) -> None:
        result = html("* Same\n* Same\n* Same")
        assert 'id="same"' in result
        assert 'id="same-1"' in result
        assert 'id="same-2"' in result

    def test_deep_headline_capped(self) -> None:
        result = html("******* Deep")
        assert '<h6 id="deep">Deep</h6>' in result
        assert 'class="outline-6"' in result

    def test_custom_max_level(self) -> None:
        renderer = HtmlRenderer(max_heading_level=2)
        assert "<h2" in renderer.render(parse_events("*** Three"))

    def test_commented_subtree_suppressed(self) -> None:
        result = html("* COMMENT Hidden\nsecret\n** Child\n* Shown")
        assert "Shown" in result
        assert "Hidden" not in result
        assert "secret" not in result
        assert "Child" not in result

    def test_custom_slugify(self) -> None:
        renderer = HtmlRenderer(slugify=lambda text: text.upper())
        assert 'id="TITLE"' in renderer.render(parse_events("* title"))


class TestHeadings:
    """Headings collected during rendering."""

    def test_get_headings(self) -> None:
        renderer = HtmlRenderer()
        renderer.render(parse_events("* One\n** Two\n******* Seven"))
        assert renderer.get_headings() == [
            HeadingInfo(level=1, text="One", slug="one"),
            HeadingInfo(level=2, text="Two", slug="two"),
            HeadingInfo(level=7, text="Seven", slug="seven"),
        ]

    def test_no_render_yet(self) -> None:
        assert HtmlRenderer().get_headings() == []

    def test_headings_reset_per_render(self) -> None:
        renderer = HtmlRenderer()
        renderer.render(parse_events("* A"))
        renderer.render(parse_events("* B"))
        assert [heading.text for heading in renderer.get_headings()] == ["B"]


class TestBlocks:
    """Paragraphs, lists, tables and greater blocks."""

    def test_paragraph_escaping(self) -> None:
        assert html("a < b & c > d") == "<p>a &lt; b &amp; c &gt; d</p>\n"

    def test_unordered_list(self) -> None:
        assert html("- a\n- b") == (
            '<ul class="org-ul">\n<li><p>a</p>\n</li>\n<li><p>b</p>\n</li>\n</ul>\n'
        )

    def test_ordered_list_with_counter(self) -> None:
        result = html("1. [@5] five")
        assert result.startswith('<ol class="org-ol">\n<li value="5">')

    def test_checkboxes(self) -> None:
        result = html("- [X] done\n- [ ] open\n- [-] partial")
        assert '<li class="on"><code>[X]</code> <p>done</p>' in result
        assert '<li class="off"><code>[&#xa0;]</code> <p>open</p>' in result
        assert '<li class="trans"><code>[-]</code> <p>partial</p>' in result

    def test_descriptive_list(self) -> None:
        assert html("- term :: def") == (
            '<dl class="org-dl">\n<dt>term</dt><dd><p>def</p>\n</dd>\n</dl>\n'
        )

    def test_table_with_header(self) -> None:
        assert html("| a | b |\n|---+---|\n| 1 | 2 |") == (
            "<table>\n"
            "<thead>\n"
            '<tr><th scope="col">a</th><th scope="col">b</th></tr>\n'
            "</thead>\n"
            "<tbody>\n"
            "<tr><td>1</td><td>2</td></tr>\n"
            "</tbody>\n"
            "</table>\n"
        )

    def test_table_without_header(self) -> None:
        assert html("| x |") == "<table>\n<tbody>\n<tr><td>x</td></tr>\n</tbody>\n</table>\n"

    def test_table_with_several_bodies(self) -> None:
        result = html("| h |\n|---|\n| 1 |\n|---|\n| 2 |")
        assert result.count("<tbody>") == 2
        assert result.count("<thead>") == 1

    def test_src_block(self) -> None:
        assert html("#+BEGIN_SRC python\nif a < b:\n    pass\n#+END_SRC") == (
            '<pre class="src src-python"><code>if a &lt; b:\n    pass</code></pre>\n'
        )

    def test_example_block(self) -> None:
        assert html("#+BEGIN_EXAMPLE\n*x*\n#+END_EXAMPLE") == '<pre class="example">*x*</pre>\n'

    def test_quote_block(self) -> None:
        assert html("#+BEGIN_QUOTE\nhi\n#+END_QUOTE") == "<blockquote>\n<p>hi</p>\n</blockquote>\n"

    def test_center_block(self) -> None:
        assert html("#+BEGIN_CENTER\nhi\n#+END_CENTER") == '<div class="center">\n<p>hi</p>\n</div>\n'

    def test_special_block(self) -> None:
        assert html("#+BEGIN_warning\nCareful\n#+END_warning") == (
            '<div class="warning">\n<p>Careful</p>\n</div>\n'
        )

    def test_verse_block(self) -> None:
        assert html("#+BEGIN_VERSE\nRoses /red/\n  violets\n#+END_VERSE") == (
            '<p class="verse">Roses <i>red</i><br />\n  violets</p>\n'
        )

    def test_export_html_is_raw(self) -> None:
        assert html("#+BEGIN_EXPORT html\n<div>raw</div>\n#+END_EXPORT") == "<div>raw</div>"

    def test_other_export_suppressed(self) -> None:
        assert html("#+BEGIN_EXPORT latex\n\\LaTeX\n#+END_EXPORT") == ""

    def test_comment_block_suppressed(self) -> None:
        assert html("#+BEGIN_COMMENT\nhidden\n#+END_COMMENT\nshown") == "<p>shown</p>\n"

    def test_horizontal_rule(self) -> None:
        assert html("-----") == "<hr />\n"

    def test_keywords_and_comments_suppressed(self) -> None:
        assert html("#+TITLE: x\n# note") == ""

    def test_properties_drawer_suppressed(self) -> None:
        result = html("* A\n:PROPERTIES:\n:ID: 1\n:END:\ntext")
        assert "ID" not in result
        assert "<p>text</p>" in result

    def test_other_drawer(self) -> None:
        assert html(":NOTES:\nhi\n:END:") == '<div class="drawer notes">\n<p>hi</p>\n</div>\n'

    def test_clock(self) -> None:
        result = html("CLOCK: [2024-10-12 Sat 10:00]--[2024-10-12 Sat 11:00] =>  1:00")
        assert result.startswith('<p class="clock">')
        assert '<span class="duration">=&gt; 1:00</span>' in result


class TestInline:
    """Inline span output."""

    def test_emphasis(self) -> None:
        assert html("*b* /i/ _u_ =v= ~c~ +s+") == (
            '<p><b>b</b> <i>i</i> <span class="underline">u</span> '
            "<code>v</code> <code>c</code> <del>s</del></p>\n"
        )

    def test_verbatim_is_escaped(self) -> None:
        assert html("=<b>=") == "<p><code>&lt;b&gt;</code></p>\n"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("[[https://x.org][X]]", '<a href="https://x.org">X</a>'),
            ("[[https://x.org]]", '<a href="https://x.org">https://x.org</a>'),
            ("[[file:notes.org][Notes]]", '<a href="notes.org">Notes</a>'),
            ("[[Some Heading]]", '<a href="#some-heading">Some Heading</a>'),
            ("[[#install][Install]]", '<a href="#install">Install</a>'),
            ("[[*Intro][Intro]]", '<a href="#intro">Intro</a>'),
            ("[[./cat.png]]", '<img src="./cat.png" alt="cat.png" />'),
            ("see https://x.org/a?b=1&c=2", '<a href="https://x.org/a?b=1&amp;c=2">'),
        ],
    )
    def test_links(self, source: str, expected: str) -> None:
        assert expected in html(source)

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("[[file:My Notes.org][n]]", '<a href="My%20Notes.org">n</a>'),
            ("[[https://x.org/a b]]", '<a href="https://x.org/a%20b">https://x.org/a b</a>'),
            ("[[https://x.org/café][c]]", '<a href="https://x.org/caf%C3%A9">c</a>'),
            ("[[https://x.org/a%20b][c]]", '<a href="https://x.org/a%20b">c</a>'),
            ("[[./my cat.png]]", '<img src="./my%20cat.png" alt="my cat.png" />'),
        ],
    )
    def test_link_targets_are_percent_encoded(self, source: str, expected: str) -> None:
        assert expected in html(source)

    def test_timestamp(self) -> None:
        assert html("<2024-03-01 Fri>") == (
            '<p><span class="timestamp-wrapper"><span class="timestamp">'
            "&lt;2024-03-01 Fri&gt;</span></span></p>\n"
        )

    def test_entity(self) -> None:
        assert html("\\alpha\\to{}") == "<p>&alpha;&rarr;</p>\n"

    def test_snippets(self) -> None:
        assert html("@@html:<b>@@x@@latex:\\bf@@") == "<p><b>x</p>\n"

    def test_line_break(self) -> None:
        assert html("a\\\\\nb") == "<p>a<br />\nb</p>\n"

    def test_scripts(self) -> None:
        assert html("H_2O x^{2}") == "<p>H<sub>2O</sub> x<sup>2</sup></p>\n"


class TestMacros:
    """Macro expansion."""

    def test_macro_with_arguments(self) -> None:
        assert html("#+MACRO: greet Hello, $1!\n{{{greet(World)}}}") == "<p>Hello, World!</p>\n"

    def test_macro_used_before_definition(self) -> None:
        assert html("{{{greet(A)}}}\n\n#+MACRO: greet Hi $1") == "<p>Hi A</p>\n"

    def test_macro_defined_later_in_one_shot_stream(self) -> None:
        stream = parse_events("{{{greet(A)}}}\n\n#+MACRO: greet Hi $1")
        events = (event for event in stream)
        assert HtmlRenderer().render(events) == "<p>Hi A</p>\n"
        assert stream.exhausted

    def test_expansion_is_parsed(self) -> None:
        assert html("#+MACRO: em *$1*\n{{{em(x)}}}") == "<p><b>x</b></p>\n"

    def test_builtin_title(self) -> None:
        assert html("#+TITLE: My Doc\n{{{title}}}") == "<p>My Doc</p>\n"

    def test_undefined_macro(self) -> None:
        assert html("a {{{nothing}}}b") == "<p>a b</p>\n"

    def test_recursive_macro_terminates(self) -> None:
        assert html("#+MACRO: loop {{{loop}}}\n{{{loop}}}") == "<p></p>\n"


class TestMapping:
    """Swapping the construct-to-tag table."""

    def test_custom_inline_tag(self) -> None:
        mapping = replace(HTML_TAGS, inline={**HTML_TAGS.inline, InlineKind.BOLD: Tag("strong")})
        assert render("*x*", mapping=mapping) == "<p><strong>x</strong></p>\n"

    def test_custom_paragraph_tag(self) -> None:
        mapping = replace(HTML_TAGS, paragraph=Tag("div", "para"))
        assert render("x", mapping=mapping) == '<div class="para">x</div>\n'

    def test_unsuppressed_drawer(self) -> None:
        mapping = replace(HTML_TAGS, suppressed_drawers=frozenset())
        assert '<div class="drawer logbook">' in render(":LOGBOOK:\nx\n:END:", mapping=mapping)

    def test_partial_mapping_falls_back(self) -> None:
        output = render("- a\n\n\n1. b\n\n\n- t :: d", mapping=TagMapping())
        assert "<ul>\n<li>" in output
        assert "<ol>\n" in output
        assert "<dl>\n" in output

    def test_tag_attributes(self) -> None:
        assert Tag("a").open(href='x"y', title=None) == '<a href="x&quot;y">'
        assert Tag("li", "item").open(class_=None) == '<li class="item">'
        assert Tag("a").close() == "</a>"

    def test_renderer_protocol(self) -> None:
        renderer: EventRenderer = HtmlRenderer()
        assert renderer.render(parse_events("x")) == "<p>x</p>\n"


class TestRenderErrors:
    """Invalid hand-built event sequences."""

    def test_end_without_start(self) -> None:
        with pytest.raises(RenderError, match="no matching start"):
            HtmlRenderer().render([Event(EventType.PARAGRAPH_END, None, 3)])

    def test_mismatched_end(self) -> None:
        events = [Event(EventType.PARAGRAPH_START), Event(EventType.SECTION_END)]
        with pytest.raises(RenderError, match="does not close PARAGRAPH_START"):
            HtmlRenderer().render(events)

    def test_start_left_open(self) -> None:
        with pytest.raises(RenderError, match="never closed"):
            HtmlRenderer().render([Event(EventType.PARAGRAPH_START)])

    def test_renderer_is_reusable(self) -> None:
        renderer = HtmlRenderer()
        first = renderer.render(parse_events("* A\ntext"))
        assert renderer.render(parse_events("* A\ntext")) == first
