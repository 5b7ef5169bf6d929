"""
Business services for RecruitDesk.

Each service checks the acting user's permission, loads what it needs
through the repositories, applies the pure core logic, and persists the
result.
"""

from recruitdesk.services.applications import ApplicationService
from recruitdesk.services.pipeline import PipelineService
from recruitdesk.services.relationships import RelationshipService
from recruitdesk.services.statistics import DataSnapshot, StatisticsService

__all__ = [
    "ApplicationService",
    "PipelineService",
    "RelationshipService",
    "StatisticsService",
    "DataSnapshot",
]
