"""Result types shared by the document validators."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..graph.node_types import EntityKind


class Severity(str, Enum):
    """Severity level of a validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue, optionally pinned to one entity."""

    code: str
    message: str
    severity: Severity
    kind: EntityKind | None = None
    entity_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        if self.kind is None or self.entity_id is None:
            return ""
        return f"{self.kind.value} '{self.entity_id}'"

    def __str__(self) -> str:
        location = f" [{self.location}]" if self.location else ""
        return f"{self.severity.value.upper()}: {self.code}{location} - {self.message}"


@dataclass
class ValidationResult:
    """Ordered issues found in one document.

    Errors are appended in the order the checks run, so the first error is the
    first rule the document breaks.
    """

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """Check if the document is structurally sound (no errors)."""
        return not self.has_errors

    @property
    def first_error(self) -> ValidationIssue | None:
        errors = self.errors
        return errors[0] if errors else None

    def add_error(
        self,
        code: str,
        message: str,
        kind: EntityKind | None = None,
        entity_id: str | None = None,
        **details: Any,
    ) -> None:
        """Add an error issue."""
        self.issues.append(
            ValidationIssue(code, message, Severity.ERROR, kind, entity_id, details)
        )

    def add_warning(
        self,
        code: str,
        message: str,
        kind: EntityKind | None = None,
        entity_id: str | None = None,
        **details: Any,
    ) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(code, message, Severity.WARNING, kind, entity_id, details)
        )

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)
