"""Alert definitions and lifecycle rules."""

from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple
from pydantic import BaseModel

from ..core.audit import AuditEntry


class AlertType(str, Enum):
    """Credit event categories."""

    DCCO_DEFERMENT = "DCCO Deferment"
    COST_OVERRUN = "Cost Overrun"
    MILESTONE_DELAY = "Milestone Delay"
    DOCUMENT_EXPIRY = "Document Expiry"
    OTHER = "Other"


class AlertSeverity(str, Enum):
    """Alert severity levels."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AlertStatus(str, Enum):
    """Alert workflow status."""

    OPEN = "Open"
    ACKNOWLEDGED = "Acknowledged"
    RESOLVED = "Resolved"
    DISMISSED = "Dismissed"

    def is_unresolved(self) -> bool:
        """Open and Acknowledged alerts still block new alerts of the same type."""
        return self in UNRESOLVED_STATUSES


UNRESOLVED_STATUSES: FrozenSet[AlertStatus] = frozenset({AlertStatus.OPEN, AlertStatus.ACKNOWLEDGED})

ALLOWED_TRANSITIONS: Dict[AlertStatus, FrozenSet[AlertStatus]] = {
    AlertStatus.OPEN: frozenset({AlertStatus.ACKNOWLEDGED, AlertStatus.RESOLVED, AlertStatus.DISMISSED}),
    AlertStatus.ACKNOWLEDGED: frozenset({AlertStatus.RESOLVED}),
    AlertStatus.RESOLVED: frozenset(),
    AlertStatus.DISMISSED: frozenset(),
}

_TRANSITION_ACTIONS: Dict[AlertStatus, str] = {
    AlertStatus.ACKNOWLEDGED: "Acknowledged Alert",
    AlertStatus.RESOLVED: "Resolved Alert",
    AlertStatus.DISMISSED: "Dismissed Alert",
}


class InvalidAlertTransition(ValueError):
    """Raised when an alert status change is not allowed."""

    def __init__(self, current: AlertStatus, requested: AlertStatus):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move alert from {current.value} to {requested.value}")


class Alert(BaseModel):
    """Credit event alert."""

    alert_id: Optional[str] = None
    project_id: str
    alert_type: AlertType
    severity: AlertSeverity
    description: str
    status: AlertStatus = AlertStatus.OPEN
    resolution_plan: Optional[str] = None

    created_at: Optional[datetime] = None
    acknowledged_at: Optional[datetime] = None
    acknowledged_by: Optional[str] = None
    acknowledged_note: Optional[str] = None
    resolved_at: Optional[datetime] = None


def can_transition(current: AlertStatus, requested: AlertStatus) -> bool:
    """Check whether a status change is allowed."""
    return requested in ALLOWED_TRANSITIONS[current]


def transition_alert(alert: Alert, new_status: AlertStatus, actor_id: str,
                     at: datetime, note: Optional[str] = None,
                     actor_email: Optional[str] = None,
                     project_loan_id: Optional[str] = None) -> Tuple[Alert, AuditEntry]:
    """Apply a status change, returning the updated alert and its audit entry.

    The input alert is not modified.
    """
    new_status = AlertStatus(new_status)
    if not can_transition(alert.status, new_status):
        raise InvalidAlertTransition(alert.status, new_status)

    if new_status == AlertStatus.RESOLVED:
        update = {"resolved_at": at, "resolution_plan": note}
    else:
        # Acknowledge and dismiss both record who handled the alert
        update = {"acknowledged_at": at, "acknowledged_by": actor_id, "acknowledged_note": note}
    update["status"] = new_status

    updated = alert.model_copy(update=update)
    entry = AuditEntry(
        user_id=actor_id,
        user_email=actor_email,
        action=_TRANSITION_ACTIONS[new_status],
        project_id=alert.project_id,
        project_loan_id=project_loan_id,
        entity_type="alert",
        entity_id=alert.alert_id,
        field_changed="status",
        old_value=alert.status.value,
        new_value=new_status.value,
        created_at=at,
    )
    return updated, entry


def alert_created_entry(alert: Alert, actor_id: str, at: datetime,
                        actor_email: Optional[str] = None,
                        project_loan_id: Optional[str] = None) -> AuditEntry:
    """Audit entry for an alert raised by hand."""
    return AuditEntry(
        user_id=actor_id,
        user_email=actor_email,
        action="Created Alert",
        project_id=alert.project_id,
        project_loan_id=project_loan_id,
        entity_type="alert",
        entity_id=alert.alert_id,
        field_changed="alert_type",
        old_value=None,
        new_value=alert.alert_type.value,
        created_at=at,
    )
