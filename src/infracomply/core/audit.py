"""Audit trail records for project and alert changes."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from .project import Project


class AuditEntry(BaseModel):
    """Immutable audit trail record."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    user_email: Optional[str] = None
    action: str
    project_id: Optional[str] = None
    project_loan_id: Optional[str] = None
    entity_type: str
    entity_id: Optional[str] = None
    field_changed: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    created_at: datetime


def audit_value(value: Any) -> str:
    """Text form of a field value as written to the audit trail."""
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def apply_project_update(project: Project, updates: Dict[str, Any], actor_id: str,
                         at: datetime,
                         actor_email: Optional[str] = None) -> Tuple[Project, List[AuditEntry]]:
    """Apply field updates to a project and build one audit entry per changed field.

    The updated project is validated like any other input. Fields whose value
    does not change produce no entry. The input project is not modified.

    Raises:
        ValueError: If an update names an unknown field or the project id.
        pydantic.ValidationError: If an updated value is invalid.
    """
    unknown = sorted(set(updates) - set(Project.model_fields))
    if unknown:
        raise ValueError(f"Unknown project fields: {', '.join(unknown)}")
    if "project_id" in updates:
        raise ValueError("project_id cannot be updated")

    updated = Project.model_validate({**project.model_dump(), **updates})

    entries = []
    for field in updates:
        old_value = getattr(project, field)
        new_value = getattr(updated, field)
        if old_value == new_value:
            continue
        entries.append(AuditEntry(
            user_id=actor_id,
            user_email=actor_email,
            action="Updated Project",
            project_id=project.project_id,
            project_loan_id=updated.loan_id,
            entity_type="project",
            entity_id=project.project_id,
            field_changed=field,
            old_value=audit_value(old_value),
            new_value=audit_value(new_value),
            created_at=at,
        ))
    return updated, entries
