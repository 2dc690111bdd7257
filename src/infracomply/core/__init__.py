"""Core components of the InfraComply engine."""

from .project import Project, ProjectStatus, Sector, SectorBucket
from .engine import ComplianceEngine
from .config import ComplianceConfig
from .audit import AuditEntry, apply_project_update

__all__ = [
    "Project",
    "ProjectStatus",
    "Sector",
    "SectorBucket",
    "ComplianceEngine",
    "ComplianceConfig",
    "AuditEntry",
    "apply_project_update",
]
