"""CLI command registration and handlers for chainhash."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from dataclasses import dataclass
from collections.abc import Callable
from typing import Any

from chainhash.contracts.error import BadInputError, Exit, InvariantError
from chainhash.core.table import HashTable, verify_table
from chainhash.io.pairs import dump_entries


@dataclass(frozen=True)
class CLIContext:
    """Runtime hooks supplied by the top-level CLI entrypoint."""

    emit_success: Callable[..., None]
    build_table: Callable[[str | None], HashTable]
    logger: logging.Logger
    guard: Callable[[Callable[[argparse.Namespace], int]], Callable[[argparse.Namespace], int]]


def register_subcommands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ctx: CLIContext,
) -> dict[str, Callable[[argparse.Namespace], int]]:
    """Define CLI subcommands and return their handlers."""

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {}

    def _register(
        name: str,
        help_text: str | None,
        configure: Callable[[argparse.ArgumentParser], Callable[[argparse.Namespace], int]],
    ) -> None:
        parser = subparsers.add_parser(name, help=help_text)
        handler = configure(parser)
        handlers[name] = ctx.guard(handler)

    _register(
        "demo",
        "Load the built-in seed pairs and print the table entries.",
        lambda parser: _configure_demo(parser, ctx),
    )
    for kind in ("entries", "keys", "values"):
        _register(
            kind,
            f"Print table {kind} in bucket order.",
            lambda parser, kind=kind: _configure_snapshot(parser, ctx, kind),
        )
    _register("get", "Look up the value stored for a key.", lambda parser: _configure_get(parser, ctx))
    _register("has", "Check whether a key is present.", lambda parser: _configure_has(parser, ctx))
    _register(
        "stats",
        "Report capacity, size, load factor and chain lengths.",
        lambda parser: _configure_stats(parser, ctx),
    )
    _register(
        "verify",
        "Check table invariants (size accounting, bucket placement, uniqueness).",
        lambda parser: _configure_verify(parser, ctx),
    )
    return handlers


def _configure_demo(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    del parser

    def handler(args: argparse.Namespace) -> int:
        if args.pairs:
            raise BadInputError(
                "demo always loads the built-in seed pairs",
                hint="Use `--pairs FILE entries` to print a pairs file",
            )
        table = ctx.build_table(None)
        entries = table.entries()
        ctx.emit_success(
            "demo",
            text=dump_entries(entries),
            data={"count": len(entries), "entries": [list(entry) for entry in entries]},
        )
        return int(Exit.OK)

    return handler


def _configure_snapshot(
    parser: argparse.ArgumentParser, ctx: CLIContext, kind: str
) -> Callable[[argparse.Namespace], int]:
    del parser

    def handler(args: argparse.Namespace) -> int:
        table = ctx.build_table(args.pairs)
        if kind == "entries":
            entries = table.entries()
            text = dump_entries(entries)
            items: list[Any] = [list(entry) for entry in entries]
        else:
            items = table.keys() if kind == "keys" else table.values()
            text = "\n".join(items)
        ctx.emit_success(kind, text=text, data={"count": len(items), kind: items})
        return int(Exit.OK)

    return handler


def _configure_get(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument("key")

    def handler(args: argparse.Namespace) -> int:
        table = ctx.build_table(args.pairs)
        value = table.get(args.key)
        found = value is not None
        ctx.emit_success("get", text=value, data={"key": args.key, "value": value, "found": found})
        if not found:
            ctx.logger.info("Key %r not found", args.key)
            return int(Exit.NOT_FOUND)
        return int(Exit.OK)

    return handler


def _configure_has(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument("key")

    def handler(args: argparse.Namespace) -> int:
        table = ctx.build_table(args.pairs)
        present = table.has(args.key)
        ctx.emit_success(
            "has", text="true" if present else "false", data={"key": args.key, "present": present}
        )
        return int(Exit.OK)

    return handler


def _configure_stats(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    del parser

    def handler(args: argparse.Namespace) -> int:
        table = ctx.build_table(args.pairs)
        histogram = Counter(table.bucket_lengths())
        data = {
            "capacity": table.capacity,
            "size": len(table),
            "load_factor": round(table.load_factor(), 4),
            "max_chain_len": table.max_chain_len(),
            "chain_length_histogram": [[length, count] for length, count in sorted(histogram.items())],
        }
        text = (
            f"capacity={data['capacity']} size={data['size']} "
            f"load_factor={data['load_factor']:.3f} max_chain_len={data['max_chain_len']}"
        )
        ctx.emit_success("stats", text=text, data=data)
        return int(Exit.OK)

    return handler


def _configure_verify(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument(
        "--verbose",
        dest="verify_verbose",
        action="store_true",
        help="Append a capacity/size/load-factor summary line",
    )

    def handler(args: argparse.Namespace) -> int:
        table = ctx.build_table(args.pairs)
        ok, messages = verify_table(table, verbose=args.verify_verbose)
        if not ok:
            ctx.logger.error("Table verification failed (%d issue(s))", len(messages))
            raise InvariantError("; ".join(messages), hint="Rebuild the table from its pairs")
        text = "\n".join(["OK", *messages])
        ctx.emit_success("verify", text=text, data={"messages": messages})
        return int(Exit.OK)

    return handler


__all__ = ["CLIContext", "register_subcommands"]
