"""Change-impact traversal, report assembly and the analysis pipeline."""

from depimpact.impact.engine import ImpactEngine, write_report
from depimpact.impact.models import ImpactEntry, ImpactReport
from depimpact.impact.report import assemble_report
from depimpact.impact.traversal import impact_of

__all__ = [
    "ImpactEngine",
    "ImpactEntry",
    "ImpactReport",
    "assemble_report",
    "impact_of",
    "write_report",
]
