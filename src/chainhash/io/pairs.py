"""Read key/value pair files and render table entries as JSON."""

from __future__ import annotations

import json
from collections.abc import Iterable
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from chainhash.contracts.error import BadInputError, InputFileError

Pair = tuple[str, str]


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema_resource = resources.files("chainhash.contracts") / "pairs_schema.json"
    with schema_resource.open(encoding="utf-8") as stream:
        schema = json.load(stream)
    return Draft202012Validator(schema)


def parse_pairs(text: str, source: str = "<string>") -> list[Pair]:
    """Parse and validate a JSON array of ``[key, value]`` string pairs."""

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BadInputError(f"{source}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    errors = sorted(_validator().iter_errors(data), key=lambda err: list(err.path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise BadInputError(
            f"{source}: {first.message} @ {location}",
            hint="Expected a JSON array of [key, value] string pairs",
        )
    return [(key, value) for key, value in data]


def load_pairs(path: str | Path) -> list[Pair]:
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise InputFileError(f"Pairs file not found: {file_path}") from exc
    except OSError as exc:
        raise InputFileError(f"Cannot read pairs file {file_path}: {exc}") from exc
    return parse_pairs(text, source=str(file_path))


def dump_entries(entries: Iterable[Pair]) -> str:
    return json.dumps([list(entry) for entry in entries], ensure_ascii=False, separators=(",", ":"))


__all__ = ["Pair", "dump_entries", "load_pairs", "parse_pairs"]
