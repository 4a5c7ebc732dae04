import csv
import logging
import sys
from typing import Iterable, TextIO

from config import Config
from engine import PaymentsEngine
from models import InvalidTransactionError
from money import format_money
from state import AccountSummary

logger = logging.getLogger(__name__)

HEADER = ("client", "available", "held", "total", "locked")


def write_summary(rows: Iterable[AccountSummary], stream: TextIO) -> None:
    """Write account summaries as CSV, one row per client."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    for row in rows:
        writer.writerow([
            row.client_id,
            format_money(row.available),
            format_money(row.held),
            format_money(row.total),
            str(row.locked).lower(),
        ])


def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    if len(argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        return 1

    config = Config.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    engine = PaymentsEngine()
    try:
        ledger = engine.process_file(argv[1])
    except InvalidTransactionError as e:
        logger.error(f"Malformed input: {e}")
        return 1
    except OSError as e:
        logger.error(f"Failed to read {argv[1]}: {e}")
        return 1

    write_summary(ledger.summary(), sys.stdout)

    print(
        f"Processed: {engine.stats.processed}, "
        f"Failed: {engine.stats.failed}",
        file=sys.stderr
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
