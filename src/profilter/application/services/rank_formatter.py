"""Plain-text rendering of a frequency table."""

from typing import Any

from profilter.domain.dtos import FrequencyTable, OccurrenceEntry


def rank(
    table: FrequencyTable[Any], descending: bool = False
) -> list[OccurrenceEntry[Any]]:
    """Sort entries by occurrence count.

    Ascending by default, so the most frequent entries end up at the bottom
    of the terminal. Ties keep table insertion order.
    """
    return table.ranked(descending=descending)


def format_rank(
    table: FrequencyTable[Any],
    descending: bool = False,
    limit: int | None = None,
) -> str:
    """Render ``<occurrences>\\t<name>`` lines, one per entry.

    Args:
        table: Table to render
        descending: Most frequent first instead of last
        limit: Keep only the N most frequent entries (still in the chosen order)

    Returns:
        Newline-joined lines, empty string for an empty table
    """
    entries = rank(table, descending=descending)
    if limit is not None:
        entries = entries[:limit] if descending else entries[max(len(entries) - limit, 0):]
    return "\n".join(f"{entry.occurrences}\t{entry.name}" for entry in entries)
