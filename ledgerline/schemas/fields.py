"""
Shared field types for the wire format.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BeforeValidator, PlainSerializer

from ledgerline.aggregates import to_wire


def _reject_float(value):
    # A JSON number has already been through a binary float by the time it
    # gets here; only strings (and integers) carry the exact value.
    if isinstance(value, float):
        raise ValueError("decimal values must be sent as strings")
    return value


# Decimal serialized as a plain-notation JSON string
DecimalString = Annotated[Decimal, PlainSerializer(to_wire, return_type=str)]

# Decimal accepted from a JSON string (or integer), serialized as a string
DecimalInput = Annotated[
    Decimal,
    BeforeValidator(_reject_float),
    PlainSerializer(to_wire, return_type=str),
]
