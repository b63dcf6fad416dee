"""Flat rows and summaries over parsed records for export and reporting."""

from __future__ import annotations

import csv
import json
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from dhcpleases.record import Record

ROW_FIELDS = [
    "type",
    "name",
    "ip_address",
    "starts",
    "ends",
    "tstp",
    "tsfp",
    "atsfp",
    "cltt",
    "binding_state",
    "next_binding_state",
    "hardware_type",
    "mac_address",
    "uid",
    "client_hostname",
    "fixed_address",
    "option_agent_circuit_id",
    "option_agent_remote_id",
    "flags",
    "set",
    "on",
    "my_state",
    "partner_state",
    "mclt",
]


def record_to_row(record: Record) -> dict[str, Any]:
    """Flatten a record into a CSV/JSONL-friendly row."""
    mapping = record.to_mapping()
    flags = [
        name
        for name in ("abandoned", "deleted", "dynamic_bootp", "dynamic", "bootp", "reserved")
        if mapping.get(name)
    ]
    row: dict[str, Any] = {}
    for key in ROW_FIELDS:
        if key == "flags":
            row[key] = ",".join(flags)
        elif key in ("set", "on", "my_state", "partner_state"):
            row[key] = json.dumps(mapping[key]) if key in mapping else ""
        else:
            row[key] = mapping.get(key, "")
    return row


def write_csv(path: Path, rows: Sequence[dict[str, Any]]) -> None:
    """Write rows to a CSV file, header first."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=ROW_FIELDS)
        writer.writeheader()
        writer.writerows(rows)


def write_jsonl(path: Path, rows: Sequence[dict[str, Any]]) -> None:
    """Write one JSON line (UTF-8) per row, replacing any existing file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row) + "\n")


def summarize_records(records: Iterable[Record]) -> dict[str, object]:
    type_counts: Counter[str] = Counter()
    state_counts: Counter[str] = Counter()
    addresses: Counter[str] = Counter()
    total = 0
    for record in records:
        total += 1
        type_counts[record.type] += 1
        if record.type == "lease":
            state_counts[record.binding_state or "unset"] += 1
            if record.ip_address:
                addresses[record.ip_address] += 1
    return {
        "declarations": total,
        "types": dict(type_counts),
        "binding_states": dict(state_counts),
        "addresses": len(addresses),
        "repeated_addresses": sorted(ip for ip, n in addresses.items() if n > 1),
    }
