"""
Filter Engine

Predicate-based filtering of the order collection by date range and
categorical equality.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

import polars as pl
import structlog
from pydantic import BaseModel, ConfigDict, field_validator

from .schema import CATEGORY, COUNTRY, ORDER_DATE, REGION, SEGMENT, STATE

logger = structlog.get_logger(__name__)

# Select widgets use this value for "no constraint"
ALL = "all"


def _normalize_choice(value):
    if value is None or value == ALL:
        return ""
    return value


class FilterCriteria(BaseModel):
    """Active filter constraints; empty values impose no constraint"""

    model_config = ConfigDict(frozen=True)

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    country: str = ""
    category: str = ""
    segment: str = ""
    region: str = ""
    state: str = ""

    @field_validator("country", "category", "segment", "region", "state", mode="before")
    @classmethod
    def normalize_choice(cls, v):
        """Treat None and the "all" sentinel as no constraint"""
        return _normalize_choice(v)

    def with_country(self, country: str) -> "FilterCriteria":
        """Change the country, clearing the state when the country differs"""
        country = _normalize_choice(country)
        if country == self.country:
            return self
        return self.model_copy(update={"country": country, "state": ""})


def _epoch_ms(day: date) -> int:
    """Epoch milliseconds of a calendar day's UTC midnight"""
    midnight = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return int(midnight.timestamp() * 1000)


def build_predicates(criteria: FilterCriteria) -> List[pl.Expr]:
    """Translate criteria into polars predicates, one per active clause"""
    predicates = []

    if criteria.start_date:
        predicates.append(pl.col(ORDER_DATE) >= _epoch_ms(criteria.start_date))
    if criteria.end_date:
        # End date covers its whole calendar day
        predicates.append(pl.col(ORDER_DATE) < _epoch_ms(criteria.end_date + timedelta(days=1)))

    for column, value in [
        (COUNTRY, criteria.country),
        (STATE, criteria.state),
        (CATEGORY, criteria.category),
        (SEGMENT, criteria.segment),
        (REGION, criteria.region),
    ]:
        if value:
            predicates.append(pl.col(column) == value)

    return predicates


def filter_orders(df: pl.DataFrame, criteria: Optional[FilterCriteria] = None) -> pl.DataFrame:
    """
    Filter the order collection.

    Returns a stable subsequence of the input rows matching every active
    clause. Empty criteria return the input frame unchanged.

    Args:
        df: Order frame
        criteria: Filter constraints

    Returns:
        Filtered order frame
    """
    if criteria is None:
        return df

    predicates = build_predicates(criteria)
    if not predicates:
        return df

    filtered = df.filter(*predicates)
    logger.debug(
        "Orders filtered",
        criteria=criteria.model_dump(mode="json", exclude_defaults=True),
        rows_before=len(df),
        rows_after=len(filtered),
    )
    return filtered
