"""CSV transaction source and account snapshot sink.

Input:  type,client,tx,amount   (header required, amount may be empty or
        omitted for dispute/resolve/chargeback, spaces after commas allowed)
Output: client,available,held,total,locked   (amounts at fixed precision)
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from typing import TextIO

from paytally.core.errors import FieldViolation, ValidationError
from paytally.core.money import DISPLAY_PLACES, to_display
from paytally.core.result import Err, Ok
from paytally.gateway.parser import parse_record
from paytally.ledger.account import AccountSnapshot
from paytally.ledger.transactions import AnyTransaction

REQUIRED_COLUMNS: frozenset[str] = frozenset({"type", "client", "tx"})
OUTPUT_COLUMNS: tuple[str, ...] = ("client", "available", "held", "total", "locked")


def _stream_error(message: str, path: str, actual: str) -> ValidationError:
    return ValidationError(
        message=message,
        code="MALFORMED_INPUT",
        source="gateway.csv_io.read_records",
        fields=(FieldViolation(path=path, constraint="well-formed CSV", actual_value=actual),),
    )


def read_records(stream: TextIO) -> Iterator[Ok[AnyTransaction] | Err[ValidationError]]:
    """Yield one Result per data row, in file order.

    A malformed header, an unreadable row or bytes the stream cannot decode
    yield a single Err and end the iteration.
    """
    reader = csv.reader(stream, skipinitialspace=True)
    try:
        header = next(reader, None)
        if header is None:
            return
        columns = [h.strip().lower() for h in header]
        missing = REQUIRED_COLUMNS - set(columns)
        if missing:
            yield Err(_stream_error(
                f"CSV header missing column(s): {sorted(missing)}", "header", repr(header),
            ))
            return

        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            raw = dict(zip(columns, row, strict=False))
            match parse_record(raw):
                case Err(error):
                    yield Err(error.with_context(f"line {reader.line_num}"))
                case Ok() as ok:
                    yield ok
    except (csv.Error, UnicodeDecodeError) as exc:
        yield Err(_stream_error(
            f"line {reader.line_num}: unreadable input: {exc}", "row", str(reader.line_num),
        ))


def write_snapshots(
    snapshots: Iterable[AccountSnapshot],
    stream: TextIO,
    places: int = DISPLAY_PLACES,
) -> int:
    """Write the header and one row per snapshot. Returns the row count."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_COLUMNS)
    count = 0
    for snap in snapshots:
        writer.writerow((
            snap.client_id,
            to_display(snap.available, places),
            to_display(snap.held, places),
            to_display(snap.total, places),
            "true" if snap.locked else "false",
        ))
        count += 1
    return count
