#!/usr/bin/env python3
"""
Fixture runner for the Hylo integer generator.

Composes every integer kind and compares the result byte-for-byte with its
golden file in tests/fixtures/<Kind>.hylo.

Usage:
    python tests/run_fixtures.py
    python tests/run_fixtures.py --verbose
    python tests/run_fixtures.py --filter UInt
    python tests/run_fixtures.py --update
"""

import argparse
import difflib
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from tqdm import tqdm

from hylo_intgen.composer import compose
from hylo_intgen.generator import Selection, build
from hylo_intgen.kinds import CATALOG, IntKind
from hylo_intgen.writer import Writer

FIXTURES_DIR = Path(__file__).parent / "fixtures"
EXTENSION = ".hylo"


def check_kind(kind: IntKind) -> tuple[str, bool, str]:
    """Compose one kind and diff it against its fixture."""
    fixture = FIXTURES_DIR / f"{kind.name}{EXTENSION}"
    if not fixture.exists():
        return kind.name, False, f"missing fixture {fixture}"

    expected = fixture.read_bytes()
    actual = compose(kind).encode("utf-8")
    if actual == expected:
        return kind.name, True, ""

    diff = difflib.unified_diff(
        expected.decode("utf-8", errors="replace").splitlines(keepends=True),
        actual.decode("utf-8").splitlines(keepends=True),
        fromfile=f"fixtures/{fixture.name}",
        tofile=f"compose({kind.name})",
    )
    return kind.name, False, "".join(diff)


def update_fixtures(selection: Selection) -> int:
    written = Writer(FIXTURES_DIR, EXTENSION).persist(build(selection))
    for path in written:
        print(f"  → {path}")
    print(f"Updated {len(written)} fixture(s)")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Compare generated integer types with their fixtures")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show a diff for each mismatch")
    parser.add_argument("-j", "--jobs", type=int, default=4,
                        help="Number of parallel jobs (default: 4)")
    parser.add_argument("--filter", type=str,
                        help="Only check kinds whose name contains this pattern")
    parser.add_argument("--json", action="store_true",
                        help="Output results in JSON format")
    parser.add_argument("--update", action="store_true",
                        help="Rewrite the fixtures from the current generator output")

    args = parser.parse_args()

    if args.update:
        return update_fixtures(Selection.ALL)

    kinds = [k for k in CATALOG if not args.filter or args.filter in k.name]
    if not kinds:
        if not args.json:
            print("No kinds match the filter!")
        return 1

    if not args.json:
        print(f"Checking {len(kinds)} fixture(s) with {args.jobs} parallel jobs...")
        print()

    start_time = time.time()

    results = []
    show_progress = not args.json and not args.verbose
    with ThreadPoolExecutor(max_workers=args.jobs) as executor:
        futures = {executor.submit(check_kind, k): k for k in kinds}
        if show_progress:
            pbar = tqdm(total=len(kinds), desc="Checking fixtures", unit="kind",
                        bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]")
        for future in as_completed(futures):
            results.append(future.result())
            if show_progress:
                pbar.update(1)
        if show_progress:
            pbar.close()

    end_time = time.time()

    passed = [name for name, ok, _ in results if ok]
    failed = [(name, detail) for name, ok, detail in results if not ok]

    if args.json:
        print(json.dumps({
            "total": len(results),
            "passed": len(passed),
            "failed": len(failed),
            "duration_seconds": round(end_time - start_time, 2),
            "failed_kinds": [name for name, _ in failed],
        }, indent=2))
        return 1 if failed else 0

    for name, detail in sorted(failed):
        print(f"✗ {name}")
        if args.verbose and detail:
            print(detail)
    if args.verbose:
        for name in sorted(passed):
            print(f"✓ {name}")

    print()
    print(f"Fixture Results ({end_time - start_time:.2f}s):")
    print(f"  Passed: {len(passed)}")
    print(f"  Failed: {len(failed)}")
    print(f"  Total:  {len(results)}")

    if failed:
        return 1
    print()
    print("All fixtures match! ✓")
    return 0


if __name__ == "__main__":
    sys.exit(main())
