import math
from typing import Dict, List, Optional

from Bookly.booking_analytics.transcript_inference import resolve_sentiment, resolve_summary

ROWS_PER_PAGE = 10


def filter_rows(rows: List[Dict], date: Optional[str] = None, sentiment: Optional[str] = None,
                keyword: Optional[str] = None) -> List[Dict]:
    """
    Apply the date / sentiment / keyword predicates over the full row set.
    Empty criteria are skipped, the input list is never modified and the
    surviving rows keep their original order.
    """
    result = list(rows)

    if date:
        result = [
            row for row in result
            if isinstance(row.get("updatedAt"), str) and row["updatedAt"].startswith(date)
        ]

    if sentiment:
        result = [row for row in result if resolve_sentiment(row) == sentiment]

    if keyword:
        needle = keyword.lower()
        result = [row for row in result if needle in (resolve_summary(row) or "").lower()]

    return result


def total_pages(count: int, page_size: int = ROWS_PER_PAGE) -> int:
    return math.ceil(count / page_size)


def paginate(rows: List[Dict], page: int = 1, page_size: int = ROWS_PER_PAGE) -> Dict:
    """Slice out the 1-based ``page``; pages below 1 are read as the first page."""
    page = max(page, 1)
    start = (page - 1) * page_size
    return {
        "rows": rows[start:start + page_size],
        "page": page,
        "pageSize": page_size,
        "total": len(rows),
        "totalPages": total_pages(len(rows), page_size),
    }
