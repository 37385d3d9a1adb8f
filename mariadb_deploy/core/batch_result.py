"""Parse the tab-separated output of ``mysql -B``."""

from typing import Dict, List, Sequence


def parse_one_row(row: str, titles: Sequence[str]) -> Dict[str, str]:
    # Fields beyond the titles, or titles beyond the fields, are dropped
    return dict(zip(titles, row.split("\t")))


def parse_batch_result(raw: str) -> List[Dict[str, str]]:
    """
    Turn batch-mode client output into one dict per result row.

    The first line holds the column titles. Values are kept as strings.
    Empty output yields an empty list.
    """
    lines = raw.split("\n")
    # mysql terminates its last row with a newline
    if lines and lines[-1] == "":
        lines.pop()
    if not lines:
        return []

    titles = lines[0].split("\t")
    return [parse_one_row(row, titles) for row in lines[1:]]
