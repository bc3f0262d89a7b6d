"""
Aggregate queries over items.

Each public function issues one statement for the given filter. On
databases with exact NUMERIC arithmetic (PostgreSQL) the aggregation runs
in SQL. Elsewhere (SQLite keeps amounts as text) the filtered amounts are
streamed and aggregated with Decimal in process.

Median and percentiles never use ``percentile_cont``: PostgreSQL only
implements it for double precision. Instead a window query returns the two
order statistics around the percentile position and they are interpolated
in Decimal.
"""

import logging
from decimal import Decimal
from typing import Tuple

from sqlalchemy import Numeric, Select, bindparam, cast, func, or_, select
from sqlalchemy.orm import Session

from ledgerline import aggregates
from ledgerline.models import Item, ItemFilter
from ledgerline.repositories.base import exact_numeric

logger = logging.getLogger(__name__)

STREAM_BATCH = 1000


def _amounts(db: Session, item_filter: ItemFilter):
    return (
        db.query(Item.amount)
        .filter(item_filter.predicates())
        .yield_per(STREAM_BATCH)
    )


def totals_statement(item_filter: ItemFilter) -> Select:
    """``SUM`` and ``COUNT`` of the filtered amounts, zero sum when empty."""
    return select(
        func.coalesce(func.sum(Item.amount), 0),
        func.count(Item.id),
    ).where(item_filter.predicates())


def percentile_statement(item_filter: ItemFilter, p: Decimal) -> Select:
    """
    The order statistics at ranks ``floor(h)`` and ``ceil(h)``, where
    ``h = p * (n - 1)``, together with ``n``. One row when ``h`` is a whole
    number, none when nothing matches.
    """
    ranked = (
        select(
            Item.amount.label("amount"),
            (func.row_number().over(order_by=Item.amount) - 1).label("rank"),
            func.count().over().label("total"),
        )
        .where(item_filter.predicates())
        .subquery("ranked")
    )
    rank_position = cast(bindparam("p", p, type_=Numeric()), Numeric()) * (ranked.c.total - 1)
    return (
        select(ranked.c.amount, ranked.c.total)
        .where(or_(ranked.c.rank == func.floor(rank_position), ranked.c.rank == func.ceil(rank_position)))
        .order_by(ranked.c.rank)
    )


def _totals(db: Session, item_filter: ItemFilter) -> Tuple[Decimal, int]:
    if exact_numeric(db):
        total, count = db.execute(totals_statement(item_filter)).one()
        return Decimal(total), count
    return aggregates.summarize(amount for (amount,) in _amounts(db, item_filter))


def sum_amounts(db: Session, item_filter: ItemFilter) -> Decimal:
    """Sum of amounts; zero for an empty selection."""
    total, _ = _totals(db, item_filter)
    return total


def avg_amount(db: Session, item_filter: ItemFilter) -> Decimal:
    """Mean amount; zero for an empty selection."""
    total, count = _totals(db, item_filter)
    return aggregates.average(total, count)


def count_items(db: Session, item_filter: ItemFilter) -> int:
    return db.query(func.count(Item.id)).filter(item_filter.predicates()).scalar()


def percentile_amount(db: Session, item_filter: ItemFilter, p: Decimal) -> Decimal:
    """
    Continuous p-th percentile of amounts, ``p`` in [0, 1]; zero for an
    empty selection.
    """
    if not exact_numeric(db):
        logger.debug("percentile computed in process")
        ordered = sorted(amount for (amount,) in _amounts(db, item_filter))
        return aggregates.continuous_percentile(ordered, p)

    rows = db.execute(percentile_statement(item_filter, p)).all()
    if not rows:
        return aggregates.ZERO

    low, total = rows[0]
    high = rows[-1].amount
    position, lower, _ = aggregates.rank_bounds(p, total)
    return aggregates.interpolate(low, high, aggregates.EXACT.subtract(position, Decimal(lower)))


def median_amount(db: Session, item_filter: ItemFilter) -> Decimal:
    return percentile_amount(db, item_filter, aggregates.MEDIAN)
