"""Raw (verbatim block body) mode scanner mixin."""

from orgstream.scanner.lines import Line, LineKind
from orgstream.scanner.modes import ScannerMode


class RawScannerMixin:
    """Mixin providing raw mode scanning logic.

    Inside ``#+BEGIN_SRC`` and the other verbatim blocks every line is body
    text until the matching end delimiter. No structural or inline
    interpretation happens here.

    """

    # These will be set by the Scanner class
    _mode: ScannerMode
    _raw_block: str

    def _make_line(self, kind: LineKind, **fields: object) -> Line:
        raise NotImplementedError

    def _is_block_end(self, content: str, name: str) -> bool:
        raise NotImplementedError

    def _scan_raw(self, line: str, content: str) -> Line:
        """Classify one line in raw mode.

        Returns:
            BLOCK_END for the matching delimiter (back to BLOCK mode),
            RAW otherwise with Org's comma escaping undone.
        """
        if content.startswith("#+") and self._is_block_end(content, self._raw_block):
            name = self._raw_block
            self._mode = ScannerMode.BLOCK
            self._raw_block = ""
            return self._make_line(LineKind.BLOCK_END, name=name)

        return self._make_line(LineKind.RAW, text=_unescape_commas(line, content))


def _unescape_commas(line: str, content: str) -> str:
    """Drop the protective comma in front of ``*`` or ``#+``.

    Org escapes body lines that would otherwise read as a headline or a
    block delimiter: ``,* not a headline``, ``,#+END_SRC``.
    """
    if content.startswith((",*", ",#+", ",,")):
        indent = line[: len(line) - len(content)]
        return indent + content[1:]
    return line
