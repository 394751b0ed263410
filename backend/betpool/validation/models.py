"""Data models for proposal validation."""

from pydantic import BaseModel, Field

from betpool.events import EventSummary


class ValidationResult(BaseModel):
    """Outcome of checking a proposal against real games."""

    valid: bool
    target_date: str
    events: list[EventSummary] = Field(default_factory=list)
