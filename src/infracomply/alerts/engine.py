"""Credit event detection over project loans."""

from typing import Callable, List, Optional, Set, Tuple
from pydantic import BaseModel, Field
import logging

from ..core.config import ComplianceConfig
from ..core.project import Project, round_half_up
from .models import Alert, AlertSeverity, AlertStatus, AlertType

logger = logging.getLogger(__name__)

OpenAlertLookup = Callable[[str, AlertType], bool]
AlertSink = Callable[[List[Alert]], None]


class AlertCycleResult(BaseModel):
    """Outcome of one evaluation cycle."""

    evaluated: int = Field(default=0, ge=0)
    skipped_inactive: int = Field(default=0, ge=0)
    alerts: List[Alert] = Field(default_factory=list)

    @property
    def created(self) -> int:
        return len(self.alerts)


def _no_open_alerts(project_id: str, alert_type: AlertType) -> bool:
    return False


class AlertEngine:
    """
    Threshold-based credit event detection.

    Rules are evaluated independently per project, so one project may raise
    both a DCCO deferment and a cost overrun alert in the same cycle. A rule
    is suppressed while an Open or Acknowledged alert of the same type exists
    for the project. The engine only creates alerts; it never closes them.
    """

    def __init__(self, config: Optional[ComplianceConfig] = None,
                 has_open_alert: Optional[OpenAlertLookup] = None):
        """Initialize alert engine with an optional de-duplication lookup."""
        self.config = config or ComplianceConfig()
        self.has_open_alert = has_open_alert or _no_open_alerts
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def check_dcco_deferment(self, project: Project) -> Optional[Alert]:
        """Raise a DCCO alert when deferment exceeds the breach threshold."""
        breach_days = self.config.get_alert_threshold("dcco_breach_days")
        if project.dcco_status <= breach_days:
            return None

        critical_days = self.config.get_alert_threshold("dcco_critical_days")
        severity = AlertSeverity.CRITICAL if project.dcco_status > critical_days else AlertSeverity.HIGH

        return Alert(
            project_id=project.project_id,
            alert_type=AlertType.DCCO_DEFERMENT,
            severity=severity,
            description=(
                f"DCCO deferred {project.dcco_status} days "
                f"(breach threshold: {breach_days:g} days)"
            ),
            status=AlertStatus.OPEN,
        )

    def check_cost_overrun(self, project: Project) -> Optional[Alert]:
        """Raise a cost overrun alert when actual cost exceeds sanction by the breach margin."""
        breach_pct = self.config.get_alert_threshold("cost_overrun_breach_pct")
        if not project.exceeds_cost_margin(breach_pct):
            return None

        # Severity is judged on the same 2 dp figure the description shows
        overrun_pct = round_half_up(project.cost_overrun_percentage(), 2)
        critical_pct = self.config.get_alert_threshold("cost_overrun_critical_pct")
        severity = AlertSeverity.CRITICAL if overrun_pct > critical_pct else AlertSeverity.HIGH

        return Alert(
            project_id=project.project_id,
            alert_type=AlertType.COST_OVERRUN,
            severity=severity,
            description=f"Cost overrun {overrun_pct:.2f}% (breach threshold: {breach_pct:g}%)",
            status=AlertStatus.OPEN,
        )

    def evaluate_project(self, project: Project) -> List[Alert]:
        """Evaluate all rules for one project and drop already-open alert types."""
        candidates = []
        for check in (self.check_dcco_deferment, self.check_cost_overrun):
            alert = check(project)
            if alert is None:
                continue
            if self.has_open_alert(project.project_id, alert.alert_type):
                self.logger.debug(
                    f"Suppressed {alert.alert_type.value} for {project.project_id}: unresolved alert exists"
                )
                continue
            candidates.append(alert)
        return candidates

    def run_cycle(self, projects: List[Project],
                  insert_alerts: Optional[AlertSink] = None) -> AlertCycleResult:
        """Evaluate every Active project and hand new alerts to the sink as one batch."""
        self.logger.info(f"Running alert evaluation over {len(projects)} projects")

        result = AlertCycleResult()
        seen: Set[Tuple[str, AlertType]] = set()

        for project in projects:
            if not project.is_active():
                result.skipped_inactive += 1
                continue
            result.evaluated += 1

            for alert in self.evaluate_project(project):
                key = (alert.project_id, alert.alert_type)
                if key in seen:
                    continue
                seen.add(key)
                result.alerts.append(alert)

        if result.alerts and insert_alerts is not None:
            insert_alerts(result.alerts)

        self.logger.info(
            f"Alert cycle complete: {result.evaluated} evaluated, "
            f"{result.skipped_inactive} inactive skipped, {result.created} alerts raised"
        )
        return result


def evaluate_project(project: Project,
                     has_open_alert: Optional[OpenAlertLookup] = None) -> List[Alert]:
    """Evaluate one project with the default thresholds."""
    return AlertEngine(has_open_alert=has_open_alert).evaluate_project(project)
