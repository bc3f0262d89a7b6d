"""
Analytics API endpoints.

Each aggregate runs as one cancellable query: it is aborted when the client
disconnects or the write timeout passes.
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ledgerline.api.cancellation import run_cancellable
from ledgerline.api.params import FilterParams, filter_params
from ledgerline.dependencies import get_read_db
from ledgerline.schemas import (
    AvgResponse,
    CountResponse,
    MedianResponse,
    PercentileResponse,
    SumResponse,
)
from ledgerline.services import analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/sum", response_model=SumResponse)
async def get_sum(
    request: Request,
    filters: FilterParams = Depends(filter_params),
    db: Session = Depends(get_read_db)
):
    """Total amount of matching items."""
    total = await run_cancellable(request, db, analytics_service.sum_amounts, **filters.as_kwargs())
    return SumResponse(sum=total)


@router.get("/avg", response_model=AvgResponse)
async def get_avg(
    request: Request,
    filters: FilterParams = Depends(filter_params),
    db: Session = Depends(get_read_db)
):
    """Average amount of matching items."""
    avg = await run_cancellable(request, db, analytics_service.avg_amount, **filters.as_kwargs())
    return AvgResponse(avg=avg)


@router.get("/count", response_model=CountResponse)
async def get_count(
    request: Request,
    filters: FilterParams = Depends(filter_params),
    db: Session = Depends(get_read_db)
):
    """Number of matching items."""
    count = await run_cancellable(request, db, analytics_service.count_items, **filters.as_kwargs())
    return CountResponse(count=count)


@router.get("/median", response_model=MedianResponse)
async def get_median(
    request: Request,
    filters: FilterParams = Depends(filter_params),
    db: Session = Depends(get_read_db)
):
    """Median amount of matching items."""
    median = await run_cancellable(request, db, analytics_service.median_amount, **filters.as_kwargs())
    return MedianResponse(median=median)


@router.get("/percentile", response_model=PercentileResponse)
async def get_percentile(
    request: Request,
    filters: FilterParams = Depends(filter_params),
    percentile: float = Query(
        analytics_service.DEFAULT_PERCENTILE,
        description="Fraction between 0 and 1",
    ),
    db: Session = Depends(get_read_db)
):
    """Continuous percentile of the amounts of matching items."""
    value = await run_cancellable(
        request,
        db,
        analytics_service.percentile_amount,
        percentile=percentile,
        **filters.as_kwargs(),
    )
    return PercentileResponse(percentile=value)
