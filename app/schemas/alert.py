from datetime import datetime
from typing import Literal
from pydantic import BaseModel


class AlertResponse(BaseModel):
    id: int
    type: Literal["low_stock", "out_of_stock"]
    product_id: int
    message: str
    severity: Literal["medium", "high"]
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True
