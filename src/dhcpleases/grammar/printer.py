"""Render records back into lease-file text in a fixed statement order."""

from __future__ import annotations

from dhcpleases.grammar.parser import parse_record
from dhcpleases.record import Record
from dhcpleases.scanner import Declaration, scan_declarations

INDENT = "  "

# (field, keyword) pairs emitted as "  <keyword> <value>;"
_LEADING_SCALARS = [
    ("starts", "starts"),
    ("ends", "ends"),
    ("tstp", "tstp"),
    ("tsfp", "tsfp"),
    ("atsfp", "atsfp"),
    ("cltt", "cltt"),
    ("binding_state", "binding state"),
    ("next_binding_state", "next binding state"),
]
_MIDDLE_FLAGS = [("dynamic_bootp", "dynamic-bootp"), ("dynamic", "dynamic")]
_TRAILING_FLAGS = [
    ("abandoned", "abandoned"),
    ("deleted", "deleted"),
    ("bootp", "bootp"),
    ("reserved", "reserved"),
]
_AGENT_OPTIONS = [
    ("option_agent_circuit_id", "option agent.circuit-id"),
    ("option_agent_remote_id", "option agent.remote-id"),
]


def _open_line(record: Record) -> str:
    if record.type == "lease":
        return f"lease {record.ip_address or record.name} {{\n"
    if record.type == "failover-state":
        # dhcpd 3.1.0 writes a blank line before each failover declaration.
        name = record.name if record.name_quoted is False else f'"{record.name}"'
        return f"\nfailover peer {name} state {{\n"
    return f"{record.type} {record.name} {{\n"


def _statement(keyword: str, value: str | None = None) -> str:
    if value is None:
        return f"{INDENT}{keyword};\n"
    return f"{INDENT}{keyword} {value};\n"


def print_record(record: Record) -> str:
    """Return the canonical declaration text for ``record``, ending in a newline."""
    out = [_open_line(record)]
    for name, keyword in _LEADING_SCALARS:
        value = getattr(record, name)
        if value:
            out.append(_statement(keyword, value))
    for name, keyword in _MIDDLE_FLAGS:
        if getattr(record, name):
            out.append(_statement(keyword))
    if record.hardware:
        out.append(_statement("hardware", f"{record.hardware_type} {record.mac_address}"))
    if record.uid:
        out.append(_statement("uid", record.uid))
    if record.fixed_address:
        out.append(_statement("fixed-address", record.fixed_address))
    for name, keyword in _TRAILING_FLAGS:
        if getattr(record, name):
            out.append(_statement(keyword))
    for name, keyword in _AGENT_OPTIONS:
        value = getattr(record, name)
        if value:
            out.append(_statement(keyword, value))
    for var, expr in (record.set or {}).items():
        out.append(_statement("set", f"{var} = {expr}"))
    if record.on is not None and record.on.events:
        body = " ".join(f"{s};" for s in record.on.statements)
        inner = f" {body} " if body else " "
        out.append(f"{INDENT}on {'|'.join(record.on.events)} {{{inner}}}\n")
    if record.client_hostname:
        out.append(_statement("client-hostname", record.client_hostname))
    if record.my_state is not None:
        out.append(_statement("my state", f"{record.my_state.state} at {record.my_state.date}"))
    if record.partner_state is not None:
        out.append(
            _statement(
                "partner state", f"{record.partner_state.state} at {record.partner_state.date}"
            )
        )
    if record.mclt:
        out.append(_statement("mclt", record.mclt))
    out.append("}\n")
    return "".join(out)


def is_canonical(declaration: Declaration, duplicates: str = "overwrite") -> bool:
    """True when re-printing the declaration reproduces its scanned lines exactly."""
    printed = print_record(parse_record(declaration, duplicates=duplicates))
    reprinted = scan_declarations(printed.splitlines())
    return len(reprinted) == 1 and reprinted[0].lines == declaration.lines
