from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class StockRequest(SQLModel, table=True):
    """Solicitud de reposición de stock."""

    __tablename__ = "stock_requests"

    id: int = Field(default=None, primary_key=True, nullable=False)
    product_id: int = Field(nullable=False, index=True)
    requester_id: int = Field(foreign_key="users.id", nullable=False)
    quantity: int = Field(nullable=False, ge=1)
    reason: str = Field(nullable=False)
    status: str = Field(default="pending", nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
