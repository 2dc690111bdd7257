"""Credit event alerting."""

from .models import (
    Alert, AlertType, AlertSeverity, AlertStatus, AuditEntry,
    InvalidAlertTransition, alert_created_entry, transition_alert,
)
from .engine import AlertEngine, AlertCycleResult, evaluate_project
from .store import InMemoryAlertStore, DuplicateOpenAlertError

__all__ = [
    "Alert",
    "AlertType",
    "AlertSeverity",
    "AlertStatus",
    "AuditEntry",
    "InvalidAlertTransition",
    "alert_created_entry",
    "transition_alert",
    "AlertEngine",
    "AlertCycleResult",
    "evaluate_project",
    "InMemoryAlertStore",
    "DuplicateOpenAlertError",
]
