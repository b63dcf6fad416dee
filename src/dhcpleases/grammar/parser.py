"""Turn one scanned declaration into a ``Record``."""

from __future__ import annotations

from typing import Any

from dhcpleases.errors import FieldConflictError, HeaderError, StatementError
from dhcpleases.grammar.statements import (
    FAILOVER_BARE_HEADER_RE,
    FAILOVER_QUOTED_HEADER_RE,
    LEASE_HEADER_RE,
    NAMED_HEADER_RE,
    match_statement,
)
from dhcpleases.record import OnBlock, PeerState, Record
from dhcpleases.scanner import Declaration

DUPLICATE_POLICIES = ("overwrite", "error")


def classify_header(header: str) -> dict[str, Any]:
    """Map a declaration header to its ``type``/``name`` fields, or ``{}``."""
    match = LEASE_HEADER_RE.fullmatch(header)
    if match:
        return {"type": "lease", "name": match.group(1), "ip_address": match.group(1)}
    match = NAMED_HEADER_RE.fullmatch(header)
    if match:
        return {"type": match.group(1), "name": match.group(2)}
    match = FAILOVER_QUOTED_HEADER_RE.fullmatch(header)
    if match:
        return {"type": "failover-state", "name": match.group(1), "name_quoted": True}
    match = FAILOVER_BARE_HEADER_RE.fullmatch(header)
    if match:
        return {"type": "failover-state", "name": match.group(1), "name_quoted": False}
    return {}


def _numbered_body(declaration: Declaration) -> list[tuple[str, int | None]]:
    numbers: list[int | None] = list(declaration.line_numbers)
    if len(numbers) != len(declaration.lines):
        numbers = [None] * len(declaration.lines)
    return list(zip(declaration.lines, numbers))[1:]


def parse_record(declaration: Declaration, duplicates: str = "overwrite") -> Record:
    """Parse a declaration's header and body statements.

    Statements may appear in any order. A repeated statement overwrites the
    earlier value unless ``duplicates="error"``, which raises
    ``FieldConflictError`` instead. The first unrecognized line aborts the
    whole declaration with ``StatementError``.
    """
    if duplicates not in DUPLICATE_POLICIES:
        raise ValueError(f"Unknown duplicates policy '{duplicates}'. Choose from {DUPLICATE_POLICIES}.")

    values = classify_header(declaration.header)
    if not values:
        opening = declaration.lines[0] if declaration.lines else declaration.header
        raise HeaderError(
            "Declaration header not recognized", line=opening, line_number=declaration.line_number
        )

    for line, number in _numbered_body(declaration):
        if not line or line.startswith("#") or line == "}":
            continue
        found = match_statement(line)
        if found is None:
            raise StatementError("Statement not recognized", line=line, line_number=number)
        _statement, extracted = found
        for key, value in extracted.items():
            if key == "set":
                var, expr = value
                sets = values.setdefault("set", {})
                if var in sets and duplicates == "error":
                    raise FieldConflictError(f"set {var}", line, number)
                sets[var] = expr
                continue
            if key in values and duplicates == "error":
                raise FieldConflictError(key, line, number)
            if key == "on":
                value = OnBlock(events=value[0], statements=value[1])
            elif key in ("my_state", "partner_state"):
                value = PeerState(state=value[0], date=value[1])
            values[key] = value
    return Record(**values)
