"""Separate-chaining hash table for string keys and values."""

from . import config, contracts, core, io
from .core import Chain, HashTable, rolling_hash, verify_table

__all__ = [
    "Chain",
    "HashTable",
    "config",
    "contracts",
    "core",
    "io",
    "rolling_hash",
    "verify_table",
]
