"""Command-line entrypoint for formatting tunnel engine notices.

Reads one JSON notice per line (stdin by default) and writes diagnostic records
through the configured sink. The console sink prints `[timestamp] message`
lines, which turns a raw notice stream into a human-readable log.

`--check-config FILE` instead decodes a config blob and prints its compact
re-encoding, or the descriptive error when it does not decode.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from config import load_config
from diagnostics import Err, decode_config, encode_config
from diagnostics.ingest import NoticeHandler
from observability import DiagnosticRecorder, build_sink


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Format tunnel engine notices as diagnostic lines")
    parser.add_argument("--notices", type=Path, default=None, help="notices input file (defaults to stdin)")
    parser.add_argument("--check-config", type=Path, default=None, help="validate a config blob and exit")
    return parser.parse_args(argv)


def check_config(path: Path, *, out: TextIO, err: TextIO) -> int:
    """Decode the config blob at `path`; print the result. Returns an exit code."""
    decoded = decode_config(path.read_bytes())
    if isinstance(decoded, Err):
        print(decoded.describe(), file=err)
        return 1
    encoded = encode_config(decoded.value)
    if isinstance(encoded, Err):
        print(encoded.describe(), file=err)
        return 1
    print(encoded.value, file=out)
    return 0


def run(notices: Iterable[str | bytes], *, out: TextIO, err: TextIO) -> int:
    """Handle every notice in `notices`; print a summary to `err`."""
    cfg = load_config()
    recorder = DiagnosticRecorder(sink=build_sink(cfg, stream=out), max_cause_depth=cfg.max_cause_depth)
    handler = NoticeHandler(recorder, record_skipped=cfg.record_skipped)
    try:
        handler.handle_many(notices)
    finally:
        recorder.close()

    stats = handler.stats()
    print(
        f"notices: {stats['diagnostic']} formatted, {stats['skipped']} skipped, {stats['error']} errors",
        file=err,
    )
    degraded = recorder.degraded_status()
    if degraded["write_failures"]:
        print(f"sink write failures: {degraded['write_failures']}", file=err)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for `python src/main.py`."""
    args = parse_args(argv)
    if args.check_config is not None:
        return check_config(args.check_config, out=sys.stdout, err=sys.stderr)
    if args.notices is not None:
        with args.notices.open(encoding="utf-8", errors="surrogateescape") as fh:
            return run(fh, out=sys.stdout, err=sys.stderr)
    # Raw bytes, so a line with bad UTF-8 is reported for that notice alone.
    return run(sys.stdin.buffer, out=sys.stdout, err=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
