"""Regulatory reporting modules for the InfraComply engine."""

from .crilc import CRILCReportGenerator, CRILCReport, CRILCReportEntry, current_week_range

__all__ = [
    "CRILCReportGenerator",
    "CRILCReport",
    "CRILCReportEntry",
    "current_week_range",
]
