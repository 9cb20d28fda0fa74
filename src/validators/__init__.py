"""Structural checks for rendered forest plot SVGs."""

from .report import ValidationIssue, ValidationReport
from .validate import validate_svg

__all__ = ["ValidationIssue", "ValidationReport", "validate_svg"]
