from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class ModerationRequest(BaseModel):
    text: str


class VerdictOut(BaseModel):
    isClean: bool
    severity: Literal["clean", "soft", "hard"]
    reason: Optional[str] = None
    detectionType: Optional[str] = None
    detectedWord: Optional[str] = None


class ModerationResponse(BaseModel):
    status: Literal["ACCEPTED", "REJECTED", "ERROR"]
    reason: Optional[str] = None
