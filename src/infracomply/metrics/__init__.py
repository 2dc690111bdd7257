"""Portfolio exposure and risk metrics."""

from .portfolio import (
    portfolio_exposure, risk_distribution, top_risk_projects, credit_events_timeline,
)

__all__ = ["portfolio_exposure", "risk_distribution", "top_risk_projects", "credit_events_timeline"]
