"""Configuration management for the InfraComply engine."""

from pathlib import Path
from typing import Any, Dict
import yaml
from pydantic import BaseModel, Field


class ComplianceConfig(BaseModel):
    """RBI provisioning, risk scoring and alert threshold configuration."""

    provisioning: Dict[str, Any] = Field(default_factory=dict)
    risk_scoring: Dict[str, Any] = Field(default_factory=dict)
    risk_tiers: Dict[str, Any] = Field(default_factory=dict)
    alert_thresholds: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def load_default(cls) -> "ComplianceConfig":
        """Load default configuration from package yaml file."""
        config_path = Path(__file__).parent.parent / "config.yaml"
        return cls.load_from_file(config_path)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "ComplianceConfig":
        """Load configuration from YAML file."""
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
        return cls(**config_data)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, indent=2)

    def get_base_provision_rate(self, bucket: str) -> float:
        """Get base provision rate for a sector bucket ("infrastructure" or "cre")."""
        base_rates = self.provisioning.get("base_rates", {})
        if bucket in base_rates:
            return base_rates[bucket]

        # Fallback to RBI standard asset rates
        return 0.01 if bucket == "infrastructure" else 0.0125

    def get_deferment_quarter_days(self) -> int:
        """Days counted as one quarter of DCCO deferment."""
        return self.provisioning.get("quarter_days", 90)

    def get_additional_rate_per_quarter(self) -> float:
        """Additional provision rate per deferred quarter."""
        return self.provisioning.get("additional_rate_per_quarter", 0.00375)

    def get_score_cap(self, component: str) -> float:
        """Get cap for a risk score component (schedule, cost, alerts)."""
        caps = self.risk_scoring.get("caps", {})
        defaults = {"schedule": 40.0, "cost": 35.0, "alerts": 25.0}
        return caps.get(component, defaults.get(component, 0.0))

    def get_schedule_full_days(self) -> float:
        """DCCO deferment days at which the schedule component is capped."""
        return self.risk_scoring.get("schedule_full_days", 90)

    def get_cost_full_overrun_pct(self) -> float:
        """Cost overrun percentage at which the cost component is capped."""
        return self.risk_scoring.get("cost_full_overrun_pct", 10.0)

    def get_points_per_critical_alert(self) -> float:
        """Risk points added per open critical alert."""
        return self.risk_scoring.get("points_per_critical_alert", 10.0)

    def get_tier_threshold(self, tier: str) -> int:
        """Get minimum score for a risk tier ("red" or "yellow")."""
        defaults = {"red": 75, "yellow": 40}
        return self.risk_tiers.get(tier, defaults.get(tier, 0))

    def get_alert_threshold(self, name: str) -> float:
        """Get an alert breach or severity threshold."""
        defaults = {
            "dcco_breach_days": 90,
            "dcco_critical_days": 150,
            "cost_overrun_breach_pct": 10.0,
            "cost_overrun_critical_pct": 15.0,
        }
        return self.alert_thresholds.get(name, defaults[name])
