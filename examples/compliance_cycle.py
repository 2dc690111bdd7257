"""
Example showing a full weekly compliance run over a synthetic project book.

Generates a book, provisions it, scores it, runs the alert cycle twice
against an in-memory store and prints the weekly CRILC report.
"""

import logging
from datetime import date

from infracomply import (
    ComplianceEngine, InMemoryAlertStore, ProjectBookGenerator, CRILCReportGenerator
)
from infracomply.simulator.projects import BookProfile
from infracomply.metrics.portfolio import top_risk_projects


def main():
    """Run a weekly compliance cycle."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    print("InfraComply - Weekly Compliance Run")
    print("=" * 60)

    # 1. Generate synthetic book
    generator = ProjectBookGenerator(seed=2024)
    projects = generator.generate_projects(count=40, profile=BookProfile.STRESSED)
    print(f"\nGenerated {len(projects)} projects")

    engine = ComplianceEngine()
    issues = engine.validate_inputs(projects)
    if issues:
        print(f"Input issues: {issues}")

    # 2. Provisioning
    provisions = engine.calculate_portfolio_provisions(projects)
    print(f"\nTotal provision: Rs {provisions.total_provision:,.2f} Cr over {provisions.project_count} projects")
    for sector, amount in provisions.sector_breakdown.items():
        print(f"  {sector:<12} Rs {amount:,.2f} Cr")

    # 3. Alert cycle, run twice to show de-duplication
    store = InMemoryAlertStore()
    first = engine.run_evaluation_cycle(projects, store.has_open_alert, store.insert_alerts)
    second = engine.run_evaluation_cycle(projects, store.has_open_alert, store.insert_alerts)
    print(f"\nAlerts raised: first cycle {first.created}, second cycle {second.created}")
    print(f"Alert counts: {store.counts_by_status()}")

    # 4. Risk scoring with open critical alerts
    critical_counts = {}
    for alert in store.list_alerts():
        if alert.severity.value == "Critical":
            critical_counts[alert.project_id] = critical_counts.get(alert.project_id, 0) + 1

    active = [p for p in projects if p.is_active()]
    assessments = engine.score_projects(active, critical_counts)
    print("\nTop at-risk projects:")
    for item in top_risk_projects(assessments, active, config=engine.config):
        print(f"  {item.loan_id} {item.tier.value:<6} {item.score:>3}  {item.key_issue}")

    # 5. CRILC weekly report
    report = CRILCReportGenerator().generate_weekly_report(store.list_alerts(), projects, date.today())
    print(f"\nCRILC report {report.start_date} to {report.end_date}: {report.count} credit events")


if __name__ == "__main__":
    main()
