"""
Orders Table View

Search, sort and pagination for the recent orders table.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

import polars as pl

from .schema import CUSTOMER_NAME, ORDER_DATE, ORDER_ID, TOTAL_SALES

GAP = "..."


class SortOption(str, Enum):
    """Table sort orders"""
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    TOTAL_DESC = "total_desc"
    TOTAL_ASC = "total_asc"


_SORT_KEYS = {
    SortOption.DATE_DESC: (ORDER_DATE, True),
    SortOption.DATE_ASC: (ORDER_DATE, False),
    SortOption.TOTAL_DESC: (TOTAL_SALES, True),
    SortOption.TOTAL_ASC: (TOTAL_SALES, False),
}


@dataclass(frozen=True)
class TableState:
    """Search, sort and page selection of the orders table"""
    search_term: str = ""
    sort_option: SortOption = SortOption.DATE_DESC
    page: int = 1
    page_size: int = 5

    def with_search(self, search_term: str) -> "TableState":
        """New search term; pagination restarts at the first page"""
        return TableState(search_term, self.sort_option, 1, self.page_size)

    def with_sort(self, sort_option: Union[SortOption, str]) -> "TableState":
        return TableState(self.search_term, SortOption(sort_option), self.page, self.page_size)

    def with_page(self, page: int) -> "TableState":
        return TableState(self.search_term, self.sort_option, page, self.page_size)


@dataclass(frozen=True)
class TablePage:
    """One rendered page of the orders table"""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total_rows: int = 0
    page_numbers: List[Union[int, str]] = field(default_factory=list)


def search_orders(df: pl.DataFrame, term: str) -> pl.DataFrame:
    """Rows whose customer name (case-insensitive) or order id contains the term"""
    if not term or df.is_empty():
        return df

    return df.filter(
        pl.col(CUSTOMER_NAME).str.to_lowercase().str.contains(term.lower(), literal=True)
        | pl.col(ORDER_ID).cast(pl.Utf8).str.contains(term, literal=True)
    )


def sort_orders(df: pl.DataFrame, option: Union[SortOption, str] = SortOption.DATE_DESC) -> pl.DataFrame:
    """Stable sort by order date or total sales"""
    column, descending = _SORT_KEYS[SortOption(option)]
    return df.sort(column, descending=descending, maintain_order=True)


def total_pages(row_count: int, page_size: int) -> int:
    return math.ceil(row_count / page_size) if page_size > 0 else 0


def paginate(df: pl.DataFrame, page: int, page_size: int = 5) -> pl.DataFrame:
    """Rows of a 1-based page"""
    start = max(page - 1, 0) * page_size
    return df.slice(start, page_size)


def page_numbers(current: int, total: int, max_buttons: int = 5) -> List[Union[int, str]]:
    """
    Page buttons to show, with "..." where pages are skipped.

    The first and last pages are always present, plus the current page and
    its neighbours.

    Example:
        page_numbers(5, 10) -> [1, "...", 4, 5, 6, "...", 10]
    """
    if total <= max_buttons:
        return list(range(1, total + 1))

    start = max(2, current - 1)
    end = min(total - 1, current + 1)

    if current <= 2:
        end = 3
    elif current >= total - 1:
        start = total - 2

    pages: List[Union[int, str]] = [1]
    if start > 2:
        pages.append(GAP)
    pages.extend(range(start, end + 1))
    if end < total - 1:
        pages.append(GAP)
    pages.append(total)

    return pages


def build_table_page(df: pl.DataFrame, state: TableState, max_buttons: int = 5) -> TablePage:
    """
    Apply search, sort and pagination to the (filtered) order frame.

    Args:
        df: Filtered order frame
        state: Table search/sort/page state
        max_buttons: Page buttons before gaps are used

    Returns:
        TablePage with the rows of the requested page
    """
    matched = sort_orders(search_orders(df, state.search_term), state.sort_option)
    pages = total_pages(len(matched), state.page_size)

    return TablePage(
        rows=paginate(matched, state.page, state.page_size).to_dicts(),
        page=state.page,
        total_pages=pages,
        total_rows=len(matched),
        page_numbers=page_numbers(state.page, pages, max_buttons),
    )
