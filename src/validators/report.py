from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationIssue:
    code: str
    message: str
    hint: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationReport:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)

    def error(self, code: str, message: str, hint: str, **context: Any) -> None:
        self.errors.append(ValidationIssue(code, message, hint, context))

    def warn(self, code: str, message: str, hint: str, **context: Any) -> None:
        self.warnings.append(ValidationIssue(code, message, hint, context))

    @property
    def status(self) -> str:
        return "fail" if self.errors else "pass"

    @property
    def codes(self) -> set[str]:
        return {issue.code for issue in [*self.errors, *self.warnings]}

    def to_dict(self) -> dict[str, Any]:
        def _issue(issue: ValidationIssue) -> dict[str, Any]:
            data = {"code": issue.code, "message": issue.message, "hint": issue.hint}
            if issue.context:
                data["context"] = issue.context
            return data

        return {
            "status": self.status,
            "errors": [_issue(issue) for issue in self.errors],
            "warnings": [_issue(issue) for issue in self.warnings],
            "stats": self.stats,
        }
