"""Uniform JSON envelope returned by every endpoint."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class Envelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_success: bool
    official_email: str
    data: Optional[Any] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {
            "is_success": self.is_success,
            "official_email": self.official_email,
        }
        if self.is_success:
            if self.data is not None:
                content["data"] = self.data
        else:
            content["error"] = self.error
        return content


def success(email: str, data: Any) -> Envelope:
    return Envelope(is_success=True, official_email=email, data=data)


def failure(email: str, message: str) -> Envelope:
    return Envelope(is_success=False, official_email=email, error=message)


def health(email: str) -> Envelope:
    return Envelope(is_success=True, official_email=email)
