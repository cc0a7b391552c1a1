"""Headline title parsing.

Splits the part of a headline line after the stars into keyword, priority,
title and tags::

    ** TODO [#A] Call the plumber  :home:urgent:
       ^^^^ ^^^^ ^^^^^^^^^^^^^^^^  ^^^^^^^^^^^^^
       kw   pri  title             tags

"""

from __future__ import annotations

import re
from collections.abc import Collection

from orgstream.nodes import Headline, TodoType
from orgstream.parsing.inline import InlineResolver

_WORD_RE = re.compile(r"(\S+)(?:[ \t]+|$)")
_PRIORITY_RE = re.compile(r"\[#(\S)\](?:[ \t]+|$)")
_TAGS_RE = re.compile(r"(?:^|[ \t])(:[\w@#%:]+:)[ \t]*$")


def parse_headline(
    level: int,
    text: str,
    resolver: InlineResolver,
    todo_keywords: Collection[str],
    done_keywords: Collection[str],
) -> Headline:
    """Build a Headline payload from a HEADLINE line.

    Args:
        level: Number of stars
        text: Line content after the stars
        resolver: Inline resolver for the title
        todo_keywords: Keywords marking open tasks
        done_keywords: Keywords marking finished tasks

    Returns:
        Headline without planning (attached later by the state machine).
    """
    rest = text.strip()

    keyword = None
    todo_type = None
    match = _WORD_RE.match(rest)
    if match:
        word = match.group(1)
        if word in todo_keywords:
            keyword, todo_type = word, TodoType.TODO
        elif word in done_keywords:
            keyword, todo_type = word, TodoType.DONE
        if keyword is not None:
            rest = rest[match.end() :]

    priority = None
    match = _PRIORITY_RE.match(rest)
    if match:
        priority = match.group(1)
        rest = rest[match.end() :]

    tags: tuple[str, ...] = ()
    match = _TAGS_RE.search(rest)
    if match:
        found = [tag for tag in match.group(1).split(":") if tag]
        if found:
            tags = tuple(dict.fromkeys(found))
            rest = rest[: match.start(1)]

    raw_title = rest.strip()
    return Headline(
        level=level,
        title=resolver.resolve(raw_title),
        raw_title=raw_title,
        keyword=keyword,
        todo_type=todo_type,
        priority=priority,
        tags=tags,
    )


def parse_todo_sequence(value: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Parse a ``#+TODO:`` keyword value into (todo, done) keyword sets.

    ``TODO NEXT | DONE CANCELLED`` splits at the bar; without a bar the last
    word is the done state. Fast-access keys like ``WAIT(w@/!)`` are
    reduced to the bare keyword.

    Example:
        >>> parse_todo_sequence("TODO NEXT(n) | DONE(d)")
        (('TODO', 'NEXT'), ('DONE',))
    """
    words = [re.sub(r"\(.*\)$", "", word) for word in value.split()]
    if "|" in words:
        bar = words.index("|")
        todo, done = words[:bar], words[bar + 1 :]
    elif len(words) > 1:
        todo, done = words[:-1], words[-1:]
    else:
        todo, done = words, []
    return tuple(w for w in todo if w), tuple(w for w in done if w)
