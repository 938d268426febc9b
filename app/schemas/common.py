"""Shared schema types."""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer


# Decimal in Python, plain number in JSON payloads
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]
