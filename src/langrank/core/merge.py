# ABOUTME: Positional merge of two ranked lists into one side-by-side table
# ABOUTME: Rows are aligned by index only; labels are never matched across sources

from collections.abc import Sequence

from langrank.core.models import MISSING_LABEL, CombinedRow
from langrank.extraction.base import RankedEntry


def merge(left: Sequence[RankedEntry], right: Sequence[RankedEntry]) -> list[CombinedRow]:
    """Combine two rankings row by row.

    Row ``i`` holds the i-th entry of each side, or ``"N/A"`` where that side
    has run out. The result is as long as the longer input. Two sources that
    rank the same language differently stay on different rows.
    """
    length = max(len(left), len(right))
    return [
        CombinedRow(
            position=index + 1,
            column_a=left[index].label if index < len(left) else MISSING_LABEL,
            column_b=right[index].label if index < len(right) else MISSING_LABEL,
        )
        for index in range(length)
    ]
