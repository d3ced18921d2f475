"""
Paginated preview of typed rows for the data table view.
"""
import math
from typing import Sequence

from eda_backend import config
from eda_backend.models import RowPage, TypedRow


def paginate_rows(rows: Sequence[TypedRow], page: int, per_page: int = config.PREVIEW_ROWS_PER_PAGE) -> RowPage:
    """
    Slice one page out of the typed rows.

    Out-of-range pages are clamped to the first or last page.

    Args:
        rows: Typed rows of a profile
        page: Zero-based page index
        per_page: Rows per page

    Returns:
        RowPage with the rows of the (clamped) page

    Raises:
        ValueError: If per_page is lower than 1
    """
    if per_page < 1:
        raise ValueError("per_page must be at least 1")

    total_pages = math.ceil(len(rows) / per_page)
    page = max(0, min(page, total_pages - 1))
    start = page * per_page

    return RowPage(
        rows=list(rows[start:start + per_page]),
        page=page,
        per_page=per_page,
        total_pages=total_pages,
        total_rows=len(rows),
    )
