from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class Alert(SQLModel, table=True):
    __tablename__ = "alerts"

    id: int = Field(default=None, primary_key=True, nullable=False)
    type: str = Field(nullable=False)  # low_stock | out_of_stock
    product_id: int = Field(nullable=False, index=True)
    message: str = Field(nullable=False)
    severity: str = Field(nullable=False)  # medium | high
    is_read: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
