#!/usr/bin/env python3
"""Read span records back out of console exporter output.

The console exporter prints every finished span as an indented JSON object,
so a server's stdout ends up as JSON interleaved with ordinary log lines.
"""

import argparse
import json
import logging
import re
import sys
from typing import Iterable

from pydantic import ValidationError

from .models import SpanRecord

logger = logging.getLogger(__name__)

# The exporter prints top-level span objects unindented; nested ones are indented
_OBJECT_START = re.compile(r"^\{", re.MULTILINE)


class TranscriptError(ValueError):
    """A JSON object in the transcript is not a span record."""


def parse_console_output(text: str) -> list[SpanRecord]:
    """Parse every span record in ``text``, in output order.

    Lines that are not JSON are skipped. A JSON object that does not look
    like a span raises ``TranscriptError``.
    """
    decoder = json.JSONDecoder()
    records: list[SpanRecord] = []
    pos = 0

    while True:
        match = _OBJECT_START.search(text, pos)
        if match is None:
            break
        start = match.end() - 1
        try:
            obj, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            pos = match.end()
            continue

        try:
            records.append(SpanRecord.model_validate(obj))
        except ValidationError as e:
            line = text.count("\n", 0, start) + 1
            raise TranscriptError(f"Object at line {line} is not a span record: {e}") from e
        pos = end

    logger.debug(f"Parsed {len(records)} span records")
    return records


def group_by_trace(records: Iterable[SpanRecord]) -> dict[str, list[SpanRecord]]:
    """Group records by trace id, keeping first-seen trace order."""
    traces: dict[str, list[SpanRecord]] = {}
    for record in records:
        traces.setdefault(record.trace_id, []).append(record)
    return traces


def summarize(records: Iterable[SpanRecord]) -> str:
    """One line per span: trace id, span id, kind, name and duration."""
    lines = []
    for record in records:
        duration = record.duration
        millis = f"{duration.total_seconds() * 1000:.3f}ms" if duration is not None else "-"
        lines.append(
            f"{record.trace_id} {record.span_id} {record.kind_name} {record.name} {millis}"
        )
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Summarize console exporter output")
    parser.add_argument("file", nargs="?", help="Transcript file (defaults to stdin)")
    parser.add_argument("--by-trace", action="store_true", help="Print spans grouped by trace")
    args = parser.parse_args(argv)

    try:
        if args.file:
            with open(args.file, "r", encoding="utf-8") as f:
                text = f.read()
        else:
            text = sys.stdin.read()

        records = parse_console_output(text)
    except (OSError, UnicodeDecodeError, TranscriptError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    if args.by_trace:
        for trace_id, spans in group_by_trace(records).items():
            print(f"trace {trace_id} ({len(spans)} spans)")
            print(summarize(spans))
    else:
        print(summarize(records))

    return 0


if __name__ == "__main__":
    sys.exit(main())
