"""
Offline evaluation run over everything the ingestion API has stored.

Logs the error frequency table, the VariableHasNoValue variable ranking
and editor adoption, then dumps every user's session to a text file.

    python evaluate.py
    python evaluate.py --output sessions.txt --ranking-key match
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

import config
from analysis.aggregates import build_stats_report, load_user_ids
from analysis.patterns import default_table
from analysis.report import log_stats_report, write_session_report
from store import StoreError, get_store

logger = logging.getLogger("evaluate")


def run(output: str, ranking_key: str = "token", store=None) -> int:
    store = store if store is not None else get_store()
    table = default_table()

    uids = load_user_ids(store)
    report = build_stats_report(store, table, ranking_key=ranking_key, uids=uids)
    log_stats_report(report)

    return write_session_report(store, uids, output)


def main(argv=None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="starship-evaluate",
        description="Summarise stored (lambda () starship) usage statistics",
    )
    parser.add_argument("--output", "-o", default=config.report_path(),
                        help="Session report path (default: %(default)s)")
    parser.add_argument("--ranking-key", choices=("token", "match"), default="token",
                        help="Rank VariableHasNoValue by variable name or full message")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args.output, ranking_key=args.ranking_key)
    except StoreError:
        logger.exception("Evaluation aborted: store query failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
