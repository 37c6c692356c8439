from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    status: str = Field(
        description="`ok` means the API process is up and responding.",
        examples=["ok"],
    )
