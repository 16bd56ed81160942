import argparse
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import pandas as pd

from .bank.bank_registry import build_default_registry
from .config import get_settings
from .logging_config import setup_logging
from .pipeline import CollectingFailureReporter, InMemoryTransactionStore, SmsSyncPipeline, SyncResult
from .sms_message import RawMessage

logger = logging.getLogger(__name__)

INPUT_COLUMNS = ["_id", "address", "body", "date"]


# =========================
# CSV I/O
# =========================
def load_messages(path: str) -> List[RawMessage]:
    """Read an inbox export with _id, address, body and date (epoch ms) columns."""
    df = pd.read_csv(path, low_memory=False)
    missing = [c for c in INPUT_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path} is missing columns: {', '.join(missing)}")

    df = df.dropna(subset=["_id", "address", "body"]).copy()
    df["date"] = pd.to_numeric(df["date"], errors="coerce").fillna(0).astype("int64")
    df["_id"] = pd.to_numeric(df["_id"], errors="coerce")
    df = df.dropna(subset=["_id"])

    messages = [
        RawMessage(id=int(row.sms_id), sender_address=str(row.address), body=str(row.body), timestamp=int(row.date))
        for row in df[INPUT_COLUMNS].rename(columns={"_id": "sms_id"}).itertuples(index=False, name="Row")
    ]
    logger.info("Loaded %d messages from %s", len(messages), path)
    return messages


def saved_frame(result: SyncResult) -> pd.DataFrame:
    rows = [t.to_dict() for t in result.saved]
    df = pd.DataFrame(rows)
    if not df.empty:
        df["date_dt"] = pd.to_datetime(df["date"], unit="ms")
    return df


# =========================
# COMMANDS
# =========================
def _run_sync(pipeline: SmsSyncPipeline, messages: List[RawMessage], workers: int) -> SyncResult:
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return pipeline.sync(messages, executor=executor)
    return pipeline.sync(messages)


def cmd_parse(args, pipeline: SmsSyncPipeline, workers: int) -> int:
    result = _run_sync(pipeline, load_messages(args.input), workers)
    df = saved_frame(result)

    output = os.path.abspath(args.output)
    os.makedirs(os.path.dirname(output), exist_ok=True)
    df.to_csv(output, index=False)

    print(f"Messages read      : {result.total_messages}")
    print(f"Bank messages      : {result.bank_messages}")
    print(f"Transactions saved : {len(result.saved)}")
    print(f"Duplicates dropped : {result.duplicates_dropped}")
    print(f"Unparsed (reported): {len(result.failures)}")
    print(f"Output written to  : {output}")
    return 0


def cmd_recurring(args, pipeline: SmsSyncPipeline, workers: int) -> int:
    _run_sync(pipeline, load_messages(args.input), workers)
    patterns = pipeline.refresh_recurring()

    if not patterns:
        print("No recurring transactions found.")
        return 0

    print(f"{'TYPE':<13} {'MERCHANT':<30} {'AMOUNT':>12}  {'EVERY':<15} {'SEEN':>4}  NEXT")
    print("-" * 90)
    for p in patterns:
        next_date = pd.to_datetime(p.next_expected_date, unit="ms").strftime("%Y-%m-%d")
        print(
            f"{p.type.value:<13} {p.merchant[:30]:<30} {p.expected_amount:>12,.2f}  "
            f"{p.frequency_label:<15} {p.occurrences:>4}  {next_date}"
        )
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sms-parser", description="Bank SMS transaction extraction")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Parse an inbox CSV into a transactions CSV")
    p_parse.add_argument("--input", type=str, required=True, help="Input SMS CSV file path")
    p_parse.add_argument("--output", type=str, default=os.path.join("output", "transactions.csv"), help="Output CSV path")

    p_rec = sub.add_parser("recurring", help="List recurring payments found in an inbox CSV")
    p_rec.add_argument("--input", type=str, required=True, help="Input SMS CSV file path")

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", type=str, default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json, settings.service_name)

    if args.command == "serve":
        return cmd_serve(args)

    if not os.path.exists(args.input):
        print(f"Error: File {os.path.abspath(args.input)} not found.", file=sys.stderr)
        return 1

    pipeline = SmsSyncPipeline.from_settings(
        settings, build_default_registry(), InMemoryTransactionStore(), CollectingFailureReporter()
    )
    if args.command == "parse":
        return cmd_parse(args, pipeline, settings.parse_workers)
    return cmd_recurring(args, pipeline, settings.parse_workers)
