from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml

from dhcpleases.grammar.parser import DUPLICATE_POLICIES

ERROR_POLICIES = ("raise", "skip")


@dataclass
class ParserConfig:
    strict: bool = True  # raise ScanError on unterminated/nested blocks
    duplicates: str = "overwrite"  # or "error": FieldConflictError on repeated statements
    on_error: str = "raise"  # or "skip": keep going past bad declarations
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.duplicates not in DUPLICATE_POLICIES:
            raise ValueError(
                f"Unsupported duplicates policy '{self.duplicates}'. Choose from {DUPLICATE_POLICIES}."
            )
        if self.on_error not in ERROR_POLICIES:
            raise ValueError(
                f"Unsupported on_error policy '{self.on_error}'. Choose from {ERROR_POLICIES}."
            )

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> ParserConfig:
        unknown = set(payload) - set(sample_config())
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return ParserConfig(
            strict=bool(payload.get("strict", True)),
            duplicates=str(payload.get("duplicates", "overwrite")),
            on_error=str(payload.get("on_error", "raise")),
            encoding=str(payload.get("encoding", "utf-8")),
        )


def load_config(path: Path) -> ParserConfig:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text())
    else:
        payload = json.loads(path.read_text())
    return ParserConfig.from_mapping(payload or {})


def sample_config() -> dict[str, Any]:
    return asdict(ParserConfig())
