"""Line scanner for the orgstream parser.

Classifies each logical line of an Org buffer into a structural kind.

Architecture:
scanner/
├── __init__.py          # Re-exports Scanner, Line, LineKind, ScannerMode
├── core.py              # Scanner class (mixin composition + navigation)
├── lines.py             # Line and LineKind
├── modes.py             # ScannerMode enum, constants
├── classifiers/         # Line classification mixins
│   ├── headline.py      # * Headline
│   ├── block.py         # #+BEGIN_/#+END_, #+KEY:, # comment
│   ├── drawer.py        # :DRAWER:, :END:, :KEY: value
│   ├── table.py         # | rows, |- rules, ----- rules
│   ├── planning.py      # SCHEDULED:/DEADLINE:/CLOSED:, CLOCK:
│   └── list.py          # -, +, *, 1., 1) bullets
└── scanners/            # Mode-specific scanners
    ├── block.py         # Block mode (main dispatch)
    └── raw.py           # Verbatim block bodies

Usage:
    >>> from orgstream.scanner import Scanner
    >>> [line.kind.name for line in Scanner("#+BEGIN_SRC\\n* x\\n#+END_SRC").lines()]
    ['BLOCK_BEGIN', 'RAW', 'BLOCK_END']

"""

from orgstream.scanner.core import Scanner
from orgstream.scanner.lines import Line, LineKind
from orgstream.scanner.modes import ScannerMode

__all__ = ["Line", "LineKind", "Scanner", "ScannerMode"]
