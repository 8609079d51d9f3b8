from __future__ import annotations

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field


class SystemInfo(BaseModel):
    status: str = Field(..., description="Always 'online' when the API answers")
    server_time: datetime
    record_counts: Dict[str, int] = Field(default_factory=dict, description="Rows per record family")
    active_media: int = 0
    active_promos: int = 0
