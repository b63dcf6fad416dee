"""Whole-file view over a dhcpd leases file.

Records are kept in file order. dhcpd appends a new declaration every time
a lease changes, so the same address usually appears more than once; all
of them are kept and the last one is the current state.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from dhcpleases.config import ParserConfig
from dhcpleases.errors import ParseError
from dhcpleases.grammar.parser import parse_record
from dhcpleases.grammar.printer import print_record
from dhcpleases.record import Record
from dhcpleases.scanner import Declaration, iter_declarations


class LeaseFile:
    def __init__(self, lines: Iterable[str], config: ParserConfig | None = None):
        self.config = config or ParserConfig()
        self.records: list[Record] = []
        self.skipped: list[tuple[Declaration, ParseError]] = []
        for declaration in iter_declarations(lines, strict=self.config.strict):
            try:
                record = parse_record(declaration, duplicates=self.config.duplicates)
            except ParseError as exc:
                if self.config.on_error != "skip":
                    raise
                self.skipped.append((declaration, exc))
                continue
            self.records.append(record)

    @classmethod
    def from_text(cls, text: str, config: ParserConfig | None = None) -> LeaseFile:
        return cls(text.splitlines(), config=config)

    @classmethod
    def from_path(cls, path: Path, config: ParserConfig | None = None) -> LeaseFile:
        cfg = config or ParserConfig()
        with path.open(encoding=cfg.encoding) as f:
            return cls(f, config=cfg)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def get_objects(self, **criteria: Any) -> list[Record]:
        """Records whose attributes are all set and equal to ``criteria``.

        With no criteria every record is returned, in file order.
        """
        if not criteria:
            return list(self.records)
        matches = []
        for record in self.records:
            for key, expected in criteria.items():
                value = getattr(record, key, None)
                if value is None or value != expected:
                    break
            else:
                matches.append(record)
        return matches

    def by_address(self, address: str) -> list[Record]:
        return self.get_objects(ip_address=address)

    def by_name(self, name: str) -> list[Record]:
        return self.get_objects(name=name)

    def current(self) -> dict[str, Record]:
        """Latest lease declaration per address."""
        latest: dict[str, Record] = {}
        for record in self.records:
            if record.type == "lease" and record.ip_address:
                latest[record.ip_address] = record
        return latest

    def render(self) -> str:
        return "".join(print_record(record) for record in self.records)
