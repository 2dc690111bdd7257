"""In-memory alert store with the unresolved-alert uniqueness constraint."""

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import logging
import uuid

from ..core.audit import AuditEntry
from .models import Alert, AlertStatus, AlertType, alert_created_entry, transition_alert

logger = logging.getLogger(__name__)


class DuplicateOpenAlertError(ValueError):
    """Raised when an insert would create a second unresolved alert of a type for a project."""

    def __init__(self, project_id: str, alert_type: AlertType):
        self.project_id = project_id
        self.alert_type = alert_type
        super().__init__(
            f"Project {project_id} already has an unresolved {alert_type.value} alert"
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryAlertStore:
    """
    Alert persistence for tests, demos and single-process use.

    Enforces at most one Open/Acknowledged alert per (project, alert type),
    the same composite constraint a database store is expected to carry.
    Every status change appends an entry to the audit log.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or _utcnow
        self._alerts: Dict[str, Alert] = {}
        self._audit_log: List[AuditEntry] = []
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def audit_log(self) -> Tuple[AuditEntry, ...]:
        return tuple(self._audit_log)

    def has_open_alert(self, project_id: str, alert_type: AlertType) -> bool:
        """Check for an Open or Acknowledged alert of a type on a project."""
        return any(
            alert.project_id == project_id
            and alert.alert_type == alert_type
            and alert.status.is_unresolved()
            for alert in self._alerts.values()
        )

    def insert_alerts(self, alerts: Iterable[Alert]) -> List[Alert]:
        """Insert a batch atomically: either every alert is stored or none is."""
        batch = list(alerts)

        pending = set()
        for alert in batch:
            key = (alert.project_id, alert.alert_type)
            if alert.status.is_unresolved():
                if key in pending or self.has_open_alert(*key):
                    raise DuplicateOpenAlertError(*key)
                pending.add(key)

        now = self.clock()
        stored = []
        for alert in batch:
            record = alert.model_copy(update={
                "alert_id": alert.alert_id or uuid.uuid4().hex,
                "created_at": alert.created_at or now,
            })
            self._alerts[record.alert_id] = record
            stored.append(record)

        self.logger.info(f"Stored {len(stored)} alerts")
        return stored

    def create_alert(self, alert: Alert, actor_id: str, actor_email: Optional[str] = None,
                     project_loan_id: Optional[str] = None) -> Alert:
        """Store one manually raised alert and record who raised it."""
        stored = self.insert_alerts([alert])[0]
        self._audit_log.append(alert_created_entry(
            stored, actor_id, self.clock(),
            actor_email=actor_email, project_loan_id=project_loan_id,
        ))
        return stored

    def get(self, alert_id: str) -> Alert:
        try:
            return self._alerts[alert_id]
        except KeyError:
            raise KeyError(f"Alert {alert_id} not found") from None

    def list_alerts(self, project_id: Optional[str] = None,
                    statuses: Optional[Iterable[AlertStatus]] = None) -> List[Alert]:
        """List alerts, newest first, optionally filtered by project and status."""
        wanted = set(statuses) if statuses is not None else None
        alerts = [
            alert for alert in self._alerts.values()
            if (project_id is None or alert.project_id == project_id)
            and (wanted is None or alert.status in wanted)
        ]
        return sorted(alerts, key=lambda a: a.created_at, reverse=True)

    def update_status(self, alert_id: str, new_status: AlertStatus, actor_id: str,
                      note: Optional[str] = None, actor_email: Optional[str] = None,
                      project_loan_id: Optional[str] = None) -> Alert:
        """Move an alert through its lifecycle and record the change."""
        updated, entry = transition_alert(
            self.get(alert_id), new_status, actor_id, self.clock(),
            note=note, actor_email=actor_email, project_loan_id=project_loan_id,
        )
        self._alerts[alert_id] = updated
        self._audit_log.append(entry)
        return updated

    def counts_by_status(self) -> Dict[str, int]:
        """Alert counts per status plus total."""
        counts = {status.value.lower(): 0 for status in AlertStatus}
        for alert in self._alerts.values():
            counts[alert.status.value.lower()] += 1
        counts["total"] = len(self._alerts)
        return counts
