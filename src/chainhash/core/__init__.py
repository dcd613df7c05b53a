from .chain import Chain
from .table import (
    DEFAULT_CAPACITY,
    LOAD_FACTOR,
    HashTable,
    rolling_hash,
    verify_table,
)

__all__ = [
    "Chain",
    "HashTable",
    "DEFAULT_CAPACITY",
    "LOAD_FACTOR",
    "rolling_hash",
    "verify_table",
]
