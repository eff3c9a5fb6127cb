#!/usr/bin/env python3
"""
Example usage of the JSON repair library.

This script demonstrates:
1. Lenient mode: always returns the best-effort repaired text
2. Strict mode: raises JSONRepairError with the position of the problem
"""

import json
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from jsonmend import JSONRepair, JSONRepairError, repair_json

EXAMPLES = [
    ("{name: 'John'}", '{"name": "John"}'),
    ("{'a':2}", '{"a":2}'),
    ("[1,2,3,]", "[1,2,3]"),
    ('{"a":', '{"a":null}'),
    ("/* foo */ {}", " {}"),
    ("callback_123({});", "{}"),
    ('{"a": True, "b": None}', '{"a": true, "b": null}'),
    ('"hello" + " world"', '"hello world"'),
    ("{}\n{}", "[{},{}]"),
    ("[1.", "[1.0]"),
]


def demo_lenient():
    """Repair the examples and compare against the expected output."""
    print("\n" + "=" * 60)
    print("LENIENT MODE DEMO")
    print("=" * 60)

    passes = 0
    for text, expected in EXAMPLES:
        result = repair_json(text)
        if result == expected:
            passes += 1
            print(f"PASS: {text!r}")
        else:
            print(f"FAIL: {text!r}")
            print(f"  Expected: {expected!r}")
            print(f"  Actual:   {result!r}")

        # the repaired text must always load
        json.loads(result)

    print(f"\npassed {passes}, failed: {len(EXAMPLES) - passes}")
    return passes == len(EXAMPLES)


def demo_strict():
    """Show the positioned error raised in strict mode."""
    print("\n" + "=" * 60)
    print("STRICT MODE DEMO")
    print("=" * 60)

    repairer = JSONRepair(strict=True)
    for text in ['{"a" }', '{"a": 2} }', '"\\u26"']:
        try:
            print(f"{text!r} -> {repairer.repair(text)!r}")
        except JSONRepairError as err:
            print(f"Error {err.message} at position {err.position}")


def main():
    ok = demo_lenient()
    demo_strict()
    print("\nDone!")
    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
