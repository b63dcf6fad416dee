"""Typed representation of one parsed lease-file declaration.

Every optional field starts out as ``None`` and is only filled in when the
matching statement was seen, so "unset" never collapses into ``False`` or
an empty string. Timestamps are kept as the opaque text found in the file
(``"3 2007/08/15 11:34:58"``) to preserve their exact formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

RECORD_TYPES = ("lease", "host", "group", "subgroup", "failover-state")
TIMESTAMP_FIELDS = ("starts", "ends", "tstp", "tsfp", "atsfp", "cltt")
FLAG_FIELDS = ("abandoned", "deleted", "dynamic_bootp", "dynamic", "bootp", "reserved")


@dataclass
class OnBlock:
    """Best-effort view of an ``on <events> { <statements> }`` statement."""

    events: list[str] = field(default_factory=list)
    statements: list[str] = field(default_factory=list)


@dataclass
class PeerState:
    state: str
    date: str


@dataclass
class Record:
    type: str
    name: str
    ip_address: str | None = None
    name_quoted: bool | None = None
    starts: str | None = None
    ends: str | None = None
    tstp: str | None = None
    tsfp: str | None = None
    atsfp: str | None = None
    cltt: str | None = None
    binding_state: str | None = None
    next_binding_state: str | None = None
    uid: str | None = None
    client_hostname: str | None = None
    abandoned: bool | None = None
    deleted: bool | None = None
    dynamic_bootp: bool | None = None
    dynamic: bool | None = None
    bootp: bool | None = None
    reserved: bool | None = None
    hardware_type: str | None = None
    mac_address: str | None = None
    fixed_address: str | None = None
    option_agent_circuit_id: str | None = None
    option_agent_remote_id: str | None = None
    set: dict[str, str] | None = None
    on: OnBlock | None = None
    my_state: PeerState | None = None
    partner_state: PeerState | None = None
    mclt: str | None = None

    @property
    def hardware(self) -> tuple[str, str] | None:
        """Combined ``(hardware_type, mac_address)`` pair, if both are set."""
        if self.hardware_type and self.mac_address:
            return self.hardware_type, self.mac_address
        return None

    def populated(self) -> list[str]:
        """Names of the fields that were actually set."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for name in self.populated():
            value = getattr(self, name)
            if isinstance(value, OnBlock):
                value = {"events": list(value.events), "statements": list(value.statements)}
            elif isinstance(value, PeerState):
                value = {"state": value.state, "date": value.date}
            elif isinstance(value, dict):
                value = dict(value)
            payload[name] = value
        return payload

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> Record:
        known = {f.name for f in fields(Record)}
        unknown = set(payload) - known
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")
        if payload.get("type") not in RECORD_TYPES:
            raise ValueError(f"Unsupported record type: {payload.get('type')!r}")
        if not payload.get("name"):
            raise ValueError("Record payload is missing a name")
        values = dict(payload)
        values["name"] = str(values["name"])
        if values.get("on") is not None:
            on = values["on"]
            values["on"] = OnBlock(
                events=list(on.get("events", [])), statements=list(on.get("statements", []))
            )
        for key in ("my_state", "partner_state"):
            if values.get(key) is not None:
                values[key] = PeerState(state=values[key]["state"], date=values[key]["date"])
        if values.get("set") is not None:
            values["set"] = {str(k): str(v) for k, v in values["set"].items()}
        return Record(**values)
