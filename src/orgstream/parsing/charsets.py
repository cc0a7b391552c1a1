"""Character sets for O(1) classification in the inline resolver.

All sets are frozensets for:
- O(1) membership testing
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Reference: Org syntax, "Emphasis Markers" (org-emphasis-regexp-components)
"""

import re

# Characters allowed right before an opening emphasis marker
EMPHASIS_PRE: frozenset[str] = frozenset("-({'\"")

# Characters allowed right after a closing emphasis marker
EMPHASIS_POST: frozenset[str] = frozenset("-.,;:!?')}[\"\\")

# Emphasis bodies may span at most this many line breaks
EMPHASIS_MAX_NEWLINES = 1

# Characters that may start an inline construct. Letters at a word start
# may begin a plain link ("https://...").
INLINE_TRIGGER_RE = re.compile(r"[*/_=~+\[<\\{@^]|(?<!\w)[a-zA-Z]")

# Characters stripped from the end of a plain link
PLAIN_LINK_TRAILING = ".,;:!?'\""

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {"png", "jpg", "jpeg", "gif", "svg", "webp", "bmp", "tif", "tiff"}
)


def is_whitespace(char: str) -> bool:
    """Check if character is whitespace.

    Treats empty string as whitespace (line start/end boundary).
    """
    return not char or char.isspace()
