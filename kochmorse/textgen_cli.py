"""Command that prints text generated from a rule file."""

from __future__ import annotations

import sys

from kochmorse.textgen import TextGen, TextGenError


def main(argv: list[str] | None = None) -> int:
    """Generate text from the rule file named in ``argv`` and print it."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print("usage: textgen RULE-FILE", file=sys.stderr)
        return 1
    try:
        gen = TextGen(argv[0])
    except TextGenError as exc:
        print(f"textgen: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(gen.generate({}))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())