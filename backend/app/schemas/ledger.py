"""
Ann Investment Portal - Ledger Schemas
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime


class TransactionCreate(BaseModel):
    """
    Ledger append request. kind is free text so that unrecognised
    kinds are still recorded; amount is not range-checked.
    """
    kind: str = Field(..., min_length=1, examples=["deposit"])
    amount: float = Field(..., examples=[100.0])


class TransactionResponse(BaseModel):
    """Ledger entry as returned to clients"""
    kind: str
    amount: float
    occurred_at: datetime

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
