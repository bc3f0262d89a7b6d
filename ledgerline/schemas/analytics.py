"""
Analytics schemas.

Decimal aggregates travel as strings so no precision is lost in JSON.
"""

from pydantic import BaseModel

from ledgerline.schemas.fields import DecimalString


class SumResponse(BaseModel):
    sum: DecimalString


class AvgResponse(BaseModel):
    avg: DecimalString


class CountResponse(BaseModel):
    count: int


class MedianResponse(BaseModel):
    median: DecimalString


class PercentileResponse(BaseModel):
    percentile: DecimalString
