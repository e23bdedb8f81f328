"""Schemas shared by the entity modules."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TimestampSchema(BaseModel):
    """Timestamps exposed on every read view."""

    created_at: datetime
    updated_at: Optional[datetime] = None
