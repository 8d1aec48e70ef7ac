from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field


class Supplier(SQLModel, table=True):
    __tablename__ = "suppliers"

    id: int = Field(default=None, primary_key=True, nullable=False)
    name: str = Field(nullable=False, index=True)
    contact_person: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    tax_id: Optional[str] = Field(default=None, max_length=20)
    active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
