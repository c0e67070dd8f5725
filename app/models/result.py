from typing import Any

from pydantic import BaseModel, computed_field


class SubmissionResult(BaseModel):
    """Normalized outcome of a single call to the Rechat API."""
    success: bool
    message: str | None = None
    error: str | None = None
    status_code: int | None = None  # None when no response was received
    endpoint: str
    payload: Any = None
    response: Any = None  # None on 204
    details: dict | None = None

    @computed_field
    @property
    def lead_id(self) -> str | None:
        """Server-assigned lead identifier, if the response carried one."""
        if not isinstance(self.response, dict):
            return None
        for candidate in (self.response, self.response.get("data"), self.response.get("lead")):
            if isinstance(candidate, dict) and candidate.get("id"):
                return str(candidate["id"])
        return None
