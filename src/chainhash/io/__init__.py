"""Pair-file input and entry rendering helpers."""

from .pairs import Pair, dump_entries, load_pairs, parse_pairs

__all__ = ["Pair", "dump_entries", "load_pairs", "parse_pairs"]
