"""
Pipeline repository for RecruitDesk.

Stores pipeline templates and seeds the built-in ones.
"""

from typing import Optional

from recruitdesk.data.models.pipeline import DEFAULT_PIPELINE_TEMPLATES, Pipeline, PipelineCreate
from recruitdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class PipelineRepository(BaseRepository[Pipeline]):
    """Repository for pipeline document operations."""

    @property
    def model_class(self) -> type[Pipeline]:
        return Pipeline

    def create_from_schema(self, data: PipelineCreate, is_default: bool = False) -> Pipeline:
        """Create a pipeline from a create schema."""
        pipeline = Pipeline(**data.model_dump(), is_default=is_default)
        return self.create(pipeline)

    def get_default(self) -> Optional[Pipeline]:
        """The pipeline used by jobs without their own."""
        return self.find_one({"is_default": True, "is_active": True})

    def get_active(self) -> list[Pipeline]:
        return self.find({"is_active": True}, limit=0)

    def get_by_name(self, name: str) -> Optional[Pipeline]:
        return self.find_one({"name": name})

    def seed_defaults(self) -> list[Pipeline]:
        """
        Create the built-in templates that do not exist yet.

        The standard template becomes the default pipeline.

        Returns:
            The pipelines that were created
        """
        created = []
        for key, template in DEFAULT_PIPELINE_TEMPLATES.items():
            if self.get_by_name(template.name) is not None:
                continue
            created.append(self.create_from_schema(template, is_default=(key == "standard")))
            logger.info(f"Seeded pipeline template: {template.name}")
        return created


# Singleton instance
_pipeline_repository: Optional[PipelineRepository] = None


def get_pipeline_repository() -> PipelineRepository:
    """Get the pipeline repository singleton instance."""
    global _pipeline_repository
    if _pipeline_repository is None:
        _pipeline_repository = PipelineRepository()
    return _pipeline_repository
