"""Property-based tests for InfraComply using Hypothesis."""

import pytest
from hypothesis import given, strategies as st, settings
import math

from infracomply.core.project import Project, ProjectStatus, Sector, SectorBucket
from infracomply.accounting.provisions import ProvisionCalculator, aggregate_provisions
from infracomply.alerts.engine import AlertEngine
from infracomply.alerts.models import AlertStatus, AlertType
from infracomply.risk.scoring import RiskScorer, RiskTier, risk_tier_for_score


amounts = st.floats(min_value=0, max_value=1e6, allow_nan=False, allow_infinity=False)
deferment_days = st.integers(min_value=-3650, max_value=3650)
sectors = st.sampled_from(list(Sector))


@st.composite
def project_strategy(draw):
    """Strategy for generating valid projects."""
    sanction = draw(amounts)
    actual_cost = draw(st.one_of(st.none(), st.floats(min_value=0, max_value=sanction * 3 + 1)))
    return Project(
        project_id=f"proj_{draw(st.integers(min_value=1, max_value=999999))}",
        sector=draw(sectors),
        status=draw(st.sampled_from(list(ProjectStatus))),
        sanction_amount=sanction,
        actual_cost=actual_cost,
        dcco_status=draw(deferment_days),
    )


class TestProvisionProperties:
    """Property-based tests for provision calculations."""

    calculator = ProvisionCalculator()

    @given(amounts, sectors, deferment_days)
    def test_components_add_up(self, sanction, sector, days):
        calc = self.calculator.calculate_provision(sanction, sector, days)

        assert calc.total_provision == calc.base_provision_amount + calc.additional_provision_amount
        assert calc.base_provision_amount == sanction * calc.base_provision_rate
        assert calc.additional_provision_amount == sanction * calc.additional_provision_rate

    @given(amounts, sectors)
    def test_no_deferment_is_base_rate(self, sanction, sector):
        calc = self.calculator.calculate_provision(sanction, sector, 0)
        rate = 0.01 if sector.bucket == SectorBucket.INFRASTRUCTURE else 0.0125

        assert calc.dcco_deferment_quarters == 0
        assert calc.total_provision == sanction * rate

    @given(deferment_days)
    def test_quarters_are_ceiling(self, days):
        quarters = self.calculator.deferment_quarters(days)

        if days <= 0:
            assert quarters == 0
        else:
            assert (quarters - 1) * 90 < days <= quarters * 90

    @given(amounts, sectors, st.integers(min_value=-3650, max_value=0))
    def test_early_same_as_on_time(self, sanction, sector, days):
        early = self.calculator.calculate_provision(sanction, sector, days)
        on_time = self.calculator.calculate_provision(sanction, sector, 0)
        assert early.total_provision == on_time.total_provision

    @given(amounts, sectors, deferment_days)
    def test_repeatable(self, sanction, sector, days):
        assert (self.calculator.calculate_provision(sanction, sector, days)
                == self.calculator.calculate_provision(sanction, sector, days))

    @given(st.lists(project_strategy(), max_size=30))
    @settings(max_examples=50)
    def test_aggregation_consistent(self, projects):
        summary = aggregate_provisions(projects)

        assert summary.project_count == len(projects)
        assert set(summary.sector_breakdown) == {p.sector.value for p in projects}
        assert math.isclose(
            sum(summary.sector_breakdown.values()), summary.total_provision,
            rel_tol=1e-9, abs_tol=1e-9,
        )


class TestRiskProperties:
    """Property-based tests for risk scoring."""

    scorer = RiskScorer()

    @given(
        st.integers(min_value=-10000, max_value=10000),
        amounts,
        st.one_of(st.none(), amounts),
        st.integers(min_value=0, max_value=100),
    )
    def test_score_bounded(self, dcco, sanction, actual_cost, critical):
        score = self.scorer.compute_risk_score(dcco, sanction, actual_cost, critical)

        assert isinstance(score, int)
        assert 0 <= score <= 100

    @given(st.integers(min_value=-10000, max_value=10000))
    def test_schedule_component_capped(self, dcco):
        assert 0 <= self.scorer.schedule_component(dcco) <= 40

    @given(st.integers(min_value=0, max_value=10000), st.integers(min_value=0, max_value=10000))
    def test_schedule_monotonic(self, a, b):
        low, high = sorted((a, b))
        assert self.scorer.schedule_component(low) <= self.scorer.schedule_component(high)

    @given(st.integers(min_value=0, max_value=100))
    def test_tier_consistent_with_thresholds(self, score):
        tier = risk_tier_for_score(score)

        if score >= 75:
            assert tier == RiskTier.RED
        elif score >= 40:
            assert tier == RiskTier.YELLOW
        else:
            assert tier == RiskTier.GREEN


class TestAlertProperties:
    """Property-based tests for alert detection."""

    @given(project_strategy())
    def test_at_most_one_alert_per_type(self, project):
        alerts = AlertEngine().evaluate_project(project)
        types = [a.alert_type for a in alerts]

        assert len(types) == len(set(types))
        assert all(a.status == AlertStatus.OPEN for a in alerts)

    @given(project_strategy())
    def test_everything_suppressed_when_open(self, project):
        assert AlertEngine(has_open_alert=lambda pid, t: True).evaluate_project(project) == []

    @given(project_strategy())
    def test_dcco_alert_iff_beyond_threshold(self, project):
        alerts = AlertEngine().evaluate_project(project)
        has_dcco = any(a.alert_type == AlertType.DCCO_DEFERMENT for a in alerts)

        assert has_dcco == (project.dcco_status > 90)

    @given(st.lists(project_strategy(), max_size=20))
    @settings(max_examples=50)
    def test_cycle_only_active(self, projects):
        result = AlertEngine().run_cycle(projects)
        active_ids = {p.project_id for p in projects if p.is_active()}

        assert result.evaluated + result.skipped_inactive == len(projects)
        assert all(a.project_id in active_ids for a in result.alerts)
