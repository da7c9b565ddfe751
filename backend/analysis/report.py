"""
Output side of the evaluation run: the stats summary in the log and the
per-user session dump written to user-sessions.txt.
"""

import logging

from analysis.sessions import load_session, render_session
from models.stats import StatsReport
from store import EventStore

logger = logging.getLogger(__name__)


def log_stats_report(report: StatsReport) -> None:
    logger.info("--- Error Frequency ---")
    for name, count in report.error_types.items():
        logger.info("%s: %d", name, count)

    logger.info("--- VariableHasNoValue top variables ---")
    for entry in report.variables_with_no_value:
        logger.info("%s: %d", entry.variable, entry.count)

    logger.info(
        "%d sessions used the editor out of %d",
        report.editor_adoption.used_editor,
        report.editor_adoption.total,
    )


def write_session_report(store: EventStore, uids, path: str) -> int:
    """
    Write every user's timeline to `path`, users in sorted order.
    Returns the number of sessions written.

    Every session is loaded before the file is opened, so a store failure
    part way through leaves no report behind.
    """
    rendered = [render_session(load_session(store, uid)) for uid in sorted(uids)]

    with open(path, "w", encoding="utf-8") as f:
        for text in rendered:
            f.write(text)

    logger.info("Wrote session info to %s", path)
    return len(rendered)
