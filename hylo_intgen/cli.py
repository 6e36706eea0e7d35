"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from hylo_intgen.version import print_banner


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="hylo-intgen",
        description="Generate the Hylo standard library integer types",
    )
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--config", metavar="PATH",
                    help="Path to intgen.toml (default: ./intgen.toml if present)")
    ap.add_argument("--selection", choices=["all", "signed", "unsigned"],
                    help="Which integer kinds to generate (default: all)")
    ap.add_argument("-o", "--out", metavar="DIR",
                    help="Existing directory to write the generated files into")
    ap.add_argument("--kind", metavar="NAME",
                    help="Print the source of a single kind to stdout and exit (config is not read)")
    ap.add_argument("--workers", type=int, metavar="N",
                    help="Compose kinds on N threads")
    ap.add_argument("--dry-run", action="store_true",
                    help="List the files that would be written without writing them")
    return ap


def main(argv: list[str] | None = None) -> int:
    """Generator entry point. Returns 0 on success, 2 on error."""
    from hylo_intgen.config import load_config
    from hylo_intgen.errors import ConfigError, IntGenError
    from hylo_intgen.report import Reporter

    args = build_parser().parse_args(argv)
    reporter = Reporter()

    if args.version:
        print_banner()
        return 0

    if args.kind:
        return print_kind(args.kind, reporter)

    try:
        config = load_config(Path(args.config) if args.config else None)
        if args.selection:
            config.selection = config.selection.parse(args.selection)
        if args.out:
            config.output_dir = Path(args.out)
        if args.workers is not None:
            config.workers = args.workers
        config.validate()
    except ConfigError as e:
        reporter.exception(e, args.config)
        reporter.print()
        return 2

    print_banner()

    try:
        return run(config, dry_run=args.dry_run)
    except IntGenError as e:
        reporter.exception(e, getattr(e, "kind_name", None))
        reporter.print()
        return 2


def print_kind(name: str, reporter) -> int:
    from hylo_intgen import kinds
    from hylo_intgen.composer import compose
    from hylo_intgen.errors import ERR, ConfigError

    try:
        kind = kinds.kind_named(name)
    except KeyError:
        err = ConfigError(ERR.GE0405, value=name, expected=", ".join(kinds.kind_names()))
        reporter.exception(err)
        reporter.print()
        return 2
    sys.stdout.write(compose(kind))
    return 0


def run(config, dry_run: bool = False) -> int:
    from hylo_intgen.generator import build
    from hylo_intgen.writer import Writer

    # Validate the destination before generating anything.
    writer = None if dry_run else Writer(config.output_dir, config.extension)

    print(f"Generating {config.selection.value} integer kinds...")
    store = build(config.selection, workers=config.workers)

    if writer is None:
        for name in store:
            lines = store[name].count("\n")
            print(f"  {config.output_dir / (name + config.extension)} ({lines} lines)")
        print(f"Dry run: {len(store)} file(s) not written")
        return 0

    written = writer.persist(store)
    for path in written:
        print(f"  → {path}")
    print(f"✓ Wrote {len(written)} file(s) to {writer.directory}")
    return 0
