from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class JobResponse(BaseModel):
    id: str = Field(..., description="Job identifier")
    type: str = Field(..., description="Job kind, for example question-request")
    payload: dict[str, Any] = Field(default_factory=dict, description="Parameters the worker runs the job with")
    status: str = Field(..., description="One of new, processing, done or failed")
    created_at: datetime | None = None
    updated_at: datetime | None = None
