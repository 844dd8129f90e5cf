"""Batch orchestration: feed a record source through a Ledger in order.

Source errors (a row that could not be decoded) always end the run. Ledger
rejections end the run under ErrorPolicy.ABORT and are skipped, logged and
counted under ErrorPolicy.SKIP. Nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import final

from paytally.core.errors import FundsError, LedgerLookupError, PaytallyError, ValidationError
from paytally.core.result import Err, Ok
from paytally.infra.config import ErrorPolicy
from paytally.ledger.engine import Ledger
from paytally.ledger.transactions import AnyTransaction, ApplyOutcome

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True, slots=True)
class RunSummary:
    applied: int
    ignored: int
    skipped: tuple[FundsError | LedgerLookupError, ...] = ()

    @property
    def total(self) -> int:
        return self.applied + self.ignored + len(self.skipped)


def process(
    records: Iterable[Ok[AnyTransaction] | Err[ValidationError]],
    ledger: Ledger,
    policy: ErrorPolicy = ErrorPolicy.ABORT,
) -> Ok[RunSummary] | Err[PaytallyError]:
    """Apply every record to ledger in arrival order."""
    applied = 0
    ignored = 0
    skipped: list[FundsError | LedgerLookupError] = []

    for position, item in enumerate(records, start=1):
        match item:
            case Err(error):
                logger.error("Aborting: unreadable input record: %s", error.message)
                return Err(error)
            case Ok(record):
                pass

        match ledger.apply(record):
            case Ok(ApplyOutcome.APPLIED):
                applied += 1
            case Ok(ApplyOutcome.IGNORED):
                ignored += 1
            case Err(error) if policy is ErrorPolicy.SKIP:
                skipped.append(error)
            case Err(error):
                logger.error("Aborting at record %d: %s", position, error.message)
                return Err(error.with_context(f"record {position}"))

    summary = RunSummary(applied=applied, ignored=ignored, skipped=tuple(skipped))
    logger.info(
        "Processed %d record(s): %d applied, %d ignored, %d skipped",
        summary.total, summary.applied, summary.ignored, len(summary.skipped),
    )
    return Ok(summary)
