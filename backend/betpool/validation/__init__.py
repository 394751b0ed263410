"""Proposal validation against scheduled games."""

from .main import IntentValidator, TextGeneration, parse_target_date
from .models import ValidationResult

__all__ = ["IntentValidator", "TextGeneration", "ValidationResult", "parse_target_date"]
