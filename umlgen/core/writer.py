"""
Line-oriented text buffer used by the declaration writers.
"""

from typing import List


class CodeWriter:
    """Accumulates lines of generated code at a controllable indent depth."""

    def __init__(self, indent_string: str = "    "):
        """
        Initialize an empty buffer.

        Args:
            indent_string: Text repeated once per indent level
        """
        self.indent_string = indent_string
        self._lines: List[str] = []
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def indent(self):
        self._depth += 1

    def outdent(self):
        if self._depth == 0:
            raise ValueError("Cannot outdent below zero indentation")
        self._depth -= 1

    def write_line(self, line: str = ""):
        """Append a line at the current depth; blank lines carry no indent."""
        if line:
            self._lines.append(self.indent_string * self._depth + line)
        else:
            self._lines.append("")

    def get_data(self, line_ending: str = "\n") -> str:
        return line_ending.join(self._lines)
