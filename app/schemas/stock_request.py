from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

RequestStatus = Literal["pending", "approved", "rejected", "fulfilled"]


class StockRequestCreate(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=1, description="Unidades solicitadas")
    reason: str = Field(..., min_length=1, max_length=255)


class StockRequestStatusUpdate(BaseModel):
    status: RequestStatus


class StockRequestResponse(BaseModel):
    id: int
    product_id: int
    requester_id: int
    quantity: int
    reason: str
    status: RequestStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
