"""Customer domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field


class Customer(BaseModel):
    """A purchasing customer, keyed by contact number."""

    id: int | None = None
    name: str
    contact_number: str | None = None  # unique when present
    email: str | None = None
    gst_number: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
