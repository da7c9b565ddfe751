"""
Corpus-wide statistics over every stored event.

Computed by the evaluation run and the /stats endpoint:

  error_type_histogram:
      Count of errors per category in the pattern table. Errors matching
      no pattern are not counted anywhere.

  variable_no_value_ranking:
      How often each variable showed up in a "Variable X has no value"
      error, most frequent first, ties broken alphabetically.

  editor_adoption:
      How many known users saved editor content at least once. Known users
      are the ones who ran at least one REPL command, so error-only and
      editor-only users are not part of the denominator.
"""

import logging
from collections import Counter

from analysis.patterns import PatternTable, VARIABLE_HAS_NO_VALUE
from models.event import (
    EDITOR_CONTENT_KIND,
    ERROR_KIND,
    REPL_COMMAND_KIND,
    parse_record,
)
from models.stats import EditorAdoption, StatsReport, VariableCount
from store import EventStore

logger = logging.getLogger(__name__)


# ---------- Pure aggregations ----------

def error_type_histogram(errors, table: PatternTable) -> dict[str, int]:
    counts = Counter()
    for error in errors:
        category = table.classify(error.description)
        if category is not None:
            counts[category] += 1
    # keep table order so reports read the same every run
    return {name: counts[name] for name in table.names if counts[name]}


def variable_no_value_ranking(errors, table: PatternTable, key: str = "token") -> list[VariableCount]:
    """
    Rank variables from VariableHasNoValue errors by occurrence.

    key="token" counts the bare variable name ("foo"); key="match" counts
    the whole matched text ("Variable foo has no value").
    """
    if key == "token":
        extract = table.extract
    elif key == "match":
        extract = table.full_match
    else:
        raise ValueError(f"key must be 'token' or 'match', got {key!r}")

    counts = Counter()
    for error in errors:
        if table.classify(error.description) != VARIABLE_HAS_NO_VALUE:
            continue
        variable = extract(VARIABLE_HAS_NO_VALUE, error.description)
        if variable:
            counts[variable] += 1

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [VariableCount(variable=v, count=c) for v, c in ranked]


def distinct_user_ids(commands) -> set[str]:
    return {cmd.uid for cmd in commands}


# ---------- Store-backed aggregations ----------

def editor_adoption(store: EventStore, uids) -> EditorAdoption:
    uids = list(uids)
    used = 0
    for uid in uids:
        if store.count_by_kind_and_user(EDITOR_CONTENT_KIND, uid) > 0:
            used += 1
    return EditorAdoption(used_editor=used, total=len(uids))


def load_errors(store: EventStore) -> list:
    return [parse_record(ERROR_KIND, r) for r in store.query_by_kind(ERROR_KIND)]


def load_user_ids(store: EventStore) -> set[str]:
    commands = [parse_record(REPL_COMMAND_KIND, r) for r in store.query_by_kind(REPL_COMMAND_KIND)]
    return distinct_user_ids(commands)


def build_stats_report(store: EventStore, table: PatternTable, ranking_key: str = "token", uids=None) -> StatsReport:
    """
    Run every aggregation against the store. A store failure aborts the whole report.

    Pass `uids` when the caller already loaded the user universe, so the
    command records are scanned once and every output agrees on it.
    """
    errors = load_errors(store)
    logger.info("Got %d error instances", len(errors))

    histogram = error_type_histogram(errors, table)
    ranking = variable_no_value_ranking(errors, table, key=ranking_key)

    if uids is None:
        uids = load_user_ids(store)
    adoption = editor_adoption(store, sorted(uids))

    return StatsReport(
        error_count=len(errors),
        error_types=histogram,
        variables_with_no_value=ranking,
        editor_adoption=adoption,
        editor_adoption_rate=round(adoption.rate, 4),
    )
