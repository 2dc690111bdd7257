"""Project risk scoring."""

from .scoring import RiskScorer, RiskAssessment, RiskTier, compute_risk_score, risk_tier_for_score

__all__ = [
    "RiskScorer",
    "RiskAssessment",
    "RiskTier",
    "compute_risk_score",
    "risk_tier_for_score",
]
