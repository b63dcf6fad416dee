"""Split a lease file into its top-level ``header { ... }`` declarations.

Braces nest exactly one level deep in this grammar: a line ending in `` {``
opens a declaration and a line that is exactly ``}`` closes it. Blank lines
and ``#`` comments are dropped wherever they appear.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from dhcpleases.errors import ScanError

OPEN_RE = re.compile(r"^(.*) \{$")
CLOSE_LINE = "}"


@dataclass
class Declaration:
    header: str
    lines: list[str] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    @property
    def line_number(self) -> int:
        """Source line of the opening header line."""
        return self.line_numbers[0] if self.line_numbers else 0

    @property
    def body(self) -> list[str]:
        """Lines between the opening header line and the closing brace."""
        return self.lines[1:-1]


def iter_declarations(lines: Iterable[str], strict: bool = True) -> Iterator[Declaration]:
    """Yield declarations in source order.

    With ``strict`` a block left open at end of input, or an opening line
    inside an open block, raises ``ScanError``. Otherwise the dangling block
    is dropped and a nested opening line is kept as an ordinary body line.
    """
    current: Declaration | None = None
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if current is None:
            match = OPEN_RE.match(line)
            if match:
                current = Declaration(
                    header=match.group(1).strip(), lines=[line], line_numbers=[number]
                )
            # stray text between declarations is ignored
            continue
        if line == CLOSE_LINE:
            current.lines.append(line)
            current.line_numbers.append(number)
            yield current
            current = None
            continue
        if strict and OPEN_RE.match(line):
            raise ScanError(
                f"Nested declaration inside '{current.header}'", line=line, line_number=number
            )
        current.lines.append(line)
        current.line_numbers.append(number)

    if current is not None and strict:
        raise ScanError(
            "Unterminated declaration at end of input",
            line=current.lines[0],
            line_number=current.line_number,
        )


def scan_declarations(lines: Iterable[str], strict: bool = True) -> list[Declaration]:
    return list(iter_declarations(lines, strict=strict))
