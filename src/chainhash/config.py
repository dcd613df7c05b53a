"""Typed configuration loader for the chainhash CLI."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError
from .core.table import DEFAULT_CAPACITY, LOAD_FACTOR, HashTable


@dataclass
class TablePolicy:
    default_capacity: int = DEFAULT_CAPACITY
    load_factor: float = LOAD_FACTOR

    def validate(self) -> None:
        value = self.default_capacity
        if isinstance(value, bool) or not isinstance(value, int):
            raise BadInputError("table.default_capacity must be an integer")
        if value <= 0 or (value & (value - 1)) != 0:
            raise BadInputError("table.default_capacity must be a power of two > 0")
        if isinstance(self.load_factor, bool) or not isinstance(self.load_factor, (int, float)):
            raise BadInputError("table.load_factor must be a number")
        if not 0.0 < self.load_factor <= 1.0:
            raise BadInputError("table.load_factor must be in (0, 1]")

    def build(self, pairs: Any = ()) -> HashTable:
        return HashTable(pairs, default_capacity=self.default_capacity, load_factor=self.load_factor)


@dataclass
class AppConfig:
    table: TablePolicy = field(default_factory=TablePolicy)

    @classmethod
    def load(cls, path: Path | None) -> AppConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Config file not found: {path}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        table_data = data.get("table", {})
        if not isinstance(table_data, dict):
            raise BadInputError("[table] section must be a table")
        try:
            table = TablePolicy(**table_data)
        except TypeError as exc:
            raise BadInputError(f"Unknown key in [table]: {exc}") from exc
        return cls(table=table)

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        table_mapping: dict[str, tuple[str, Callable[[str], Any]]] = {
            "CHAINHASH_DEFAULT_CAPACITY": ("default_capacity", int),
            "CHAINHASH_LOAD_FACTOR": ("load_factor", float),
        }
        for key, (attr, caster) in table_mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(self.table, attr, value)

    def validate(self) -> None:
        self.table.validate()


def load_app_config(path: str | None) -> AppConfig:
    config_path = Path(path) if path else None
    return AppConfig.load(config_path)
