from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SendResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Only set for EMERGENCY messages awaiting acknowledgement
    receipt: str = ""
    status: int = 0
    request: str = ""


class Limits(BaseModel):
    """Call limit of the application, calls remaining, and when the counter resets."""
    model_config = ConfigDict(frozen=True)

    limit: int = 0
    remaining: int = 0
    reset: int = 0  # Unix epoch; 0 means no reset scheduled

    @property
    def reset_time(self) -> Optional[datetime]:
        if self.reset > 0:
            return datetime.fromtimestamp(self.reset, tz=timezone.utc)
        return None


class ErrorPayload(BaseModel):
    status: int = 0
    request: str = ""
    user: str = ""
    errors: list[str] = Field(default_factory=list)
    receipt: str = ""
