"""CRILC (Central Repository of Information on Large Credits) credit event report."""

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Tuple, Union
from pydantic import BaseModel, Field
import logging

from ..alerts.models import Alert
from ..core.project import Project
from ..metrics.portfolio import week_start

logger = logging.getLogger(__name__)


class CRILCReportEntry(BaseModel):
    """One credit event row in the CRILC report."""

    loan_id: str
    borrower_name: str
    sector: str
    event_type: str
    event_date: date
    status: str
    resolution_plan: str
    sanction_amount: float = Field(ge=0)
    disbursed_amount: float = Field(ge=0)


class CRILCReport(BaseModel):
    """Credit events raised in a reporting window."""

    start_date: date
    end_date: date
    entries: List[CRILCReportEntry] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.entries)


def current_week_range(today: Union[date, datetime]) -> Tuple[date, date]:
    """Sunday-to-Saturday week containing today."""
    start = week_start(today)
    return start, start + timedelta(days=6)


class CRILCReportGenerator:
    """
    Weekly CRILC report assembly.

    Alerts raised inside the window (both ends inclusive) become credit event
    rows joined with their project. Rows are ordered newest first.
    """

    def __init__(self):
        """Initialize CRILC generator."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def generate_report(self, alerts: List[Alert], projects: List[Project],
                        start_date: date, end_date: date) -> CRILCReport:
        """Generate CRILC report for the given window."""
        self.logger.info(f"Generating CRILC report for {start_date} to {end_date}")

        window_start = datetime.combine(start_date, time.min)
        window_end = datetime.combine(end_date, time.max)
        by_id: Dict[str, Project] = {project.project_id: project for project in projects}

        in_window = [
            alert for alert in alerts
            if alert.created_at is not None
            and window_start <= _naive(alert.created_at) <= window_end
        ]
        in_window.sort(key=lambda a: _naive(a.created_at), reverse=True)

        entries = [self._build_entry(alert, by_id.get(alert.project_id)) for alert in in_window]
        return CRILCReport(start_date=start_date, end_date=end_date, entries=entries)

    def generate_weekly_report(self, alerts: List[Alert], projects: List[Project],
                               today: Union[date, datetime]) -> CRILCReport:
        """Generate CRILC report for the week containing today."""
        start_date, end_date = current_week_range(today)
        return self.generate_report(alerts, projects, start_date, end_date)

    def _build_entry(self, alert: Alert, project: Optional[Project]) -> CRILCReportEntry:
        if project is None:
            self.logger.warning(f"Alert {alert.alert_id} refers to unknown project {alert.project_id}")

        return CRILCReportEntry(
            loan_id=(project.loan_id if project else None) or "N/A",
            borrower_name=(project.borrower_name if project else None) or "N/A",
            sector=project.sector.value if project else "N/A",
            event_type=alert.alert_type.value,
            event_date=alert.created_at.date(),
            status=alert.status.value,
            resolution_plan=alert.resolution_plan or "Under review",
            sanction_amount=project.sanction_amount if project else 0.0,
            disbursed_amount=project.disbursed_amount if project else 0.0,
        )


def _naive(moment: datetime) -> datetime:
    # Report windows are calendar dates; compare wall-clock values
    return moment.replace(tzinfo=None)
