"""Header and statement patterns of the dhcpd 3.1.0 lease-file grammar.

Statements are tried in table order and must match the whole (trimmed) line.
Each keys on its own leading keyword; where one keyword is a prefix of
another (``next binding state`` vs ``binding state``) the longer form is
listed first.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

# weekday year/month/day hour:minute:second
TIMESTAMP = r"(?:\d+ \d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}|never)"
IPV4 = r"\d{1,3}(?:\.\d{1,3}){3}"

LEASE_HEADER_RE = re.compile(rf"lease ({IPV4})")
NAMED_HEADER_RE = re.compile(r"(host|group|subgroup) (\S.*)")
FAILOVER_QUOTED_HEADER_RE = re.compile(r'failover peer "(.*)" state')
FAILOVER_BARE_HEADER_RE = re.compile(r"failover peer (\S+) state")


@dataclass(frozen=True)
class Statement:
    keyword: str
    pattern: re.Pattern[str]
    extract: Callable[[re.Match[str]], dict[str, Any]]


def _timestamp(match: re.Match[str]) -> dict[str, Any]:
    return {match.group(1): match.group(2)}


def _flag(match: re.Match[str]) -> dict[str, Any]:
    return {match.group(1).replace("-", "_"): True}


def _on(match: re.Match[str]) -> dict[str, Any]:
    # Nested bodies are not modeled: events split on "|", statements on ";".
    events = [e.strip() for e in match.group(1).split("|") if e.strip()]
    statements = [s.strip() for s in match.group(2).split(";") if s.strip()]
    return {"on": (events, statements)}


def _single(name: str) -> Callable[[re.Match[str]], dict[str, Any]]:
    return lambda m: {name: m.group(1)}


def _peer_state(name: str) -> Callable[[re.Match[str]], dict[str, Any]]:
    return lambda m: {name: (m.group(1), m.group(2))}


STATEMENTS: list[Statement] = [
    Statement(
        "timestamp",
        re.compile(rf"(starts|ends|tstp|tsfp|atsfp|cltt) ({TIMESTAMP});"),
        _timestamp,
    ),
    Statement(
        "next binding state",
        re.compile(r"next binding state ([\w-]+);"),
        _single("next_binding_state"),
    ),
    Statement("binding state", re.compile(r"binding state ([\w-]+);"), _single("binding_state")),
    Statement("uid", re.compile(r'uid (".*");'), _single("uid")),
    Statement(
        "client-hostname", re.compile(r'client-hostname (".*");'), _single("client_hostname")
    ),
    Statement(
        "flag",
        re.compile(r"(abandoned|deleted|dynamic-bootp|dynamic|bootp|reserved);"),
        _flag,
    ),
    Statement(
        "hardware",
        re.compile(r"hardware (\S+) (\S+);"),
        lambda m: {"hardware_type": m.group(1), "mac_address": m.group(2)},
    ),
    Statement("fixed-address", re.compile(r"fixed-address (.+);"), _single("fixed_address")),
    Statement(
        "option agent.circuit-id",
        re.compile(r"option agent\.circuit-id (.+);"),
        _single("option_agent_circuit_id"),
    ),
    Statement(
        "option agent.remote-id",
        re.compile(r"option agent\.remote-id (.+);"),
        _single("option_agent_remote_id"),
    ),
    Statement("set", re.compile(r"set (\S+) = (.*);"), lambda m: {"set": (m.group(1), m.group(2))}),
    Statement("on", re.compile(r"on ([^\s|{].*?) \{(.*)\};?"), _on),
    Statement(
        "my state", re.compile(rf"my state (\S+) at ({TIMESTAMP});"), _peer_state("my_state")
    ),
    Statement(
        "partner state",
        re.compile(rf"partner state (\S+) at ({TIMESTAMP});"),
        _peer_state("partner_state"),
    ),
    Statement("mclt", re.compile(r"mclt (\w+);"), _single("mclt")),
]


def match_statement(line: str) -> tuple[Statement, dict[str, Any]] | None:
    """Return the first statement whose pattern matches the whole line."""
    for statement in STATEMENTS:
        match = statement.pattern.fullmatch(line)
        if match:
            return statement, statement.extract(match)
    return None
