"""Inline resolution for orgstream.

Architecture:
inline/
├── core.py       # InlineResolver (dispatch + text accumulation)
├── emphasis.py   # *bold* /italic/ _underline_ =verbatim= ~code~ +strike+
├── links.py      # [[links]], <angle:links>, plain:links, timestamps
├── special.py    # entities, macros, snippets, line breaks, sub/superscripts
└── entities.py   # entity table

"""

from orgstream.parsing.inline.core import InlineResolver
from orgstream.parsing.inline.links import classify_link_target

__all__ = ["InlineResolver", "classify_link_target"]
