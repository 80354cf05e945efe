from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class EnvelopeDTO(BaseModel):
    """{success, data, message} wrapper used by every public endpoint."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    data: Any = None
    message: str | None = None
    company_name: str | None = None  # only sent by the services endpoint
