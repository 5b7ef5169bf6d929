"""
Hiring pipeline data models for RecruitDesk.

A pipeline is an ordered list of stages a candidate moves through for a
job. Stage ids map to candidate statuses via ``STAGE_TO_STATUS``.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .base import BaseDocument, EmbeddedModel


class PipelineStage(EmbeddedModel):
    """One column of the pipeline board."""

    id: str = Field(..., min_length=1)
    name: str
    description: Optional[str] = None
    color: str = "#3b82f6"
    icon: Optional[str] = None
    order: int = Field(..., ge=1)
    is_default: bool = False


class Pipeline(BaseDocument):
    """
    Pipeline template document.

    Stored in the pipelines collection.
    """

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: Literal["candidate", "interview", "custom"] = "candidate"
    stages: list[PipelineStage] = Field(default_factory=list)
    is_default: bool = False
    is_active: bool = True

    @field_validator("stages")
    @classmethod
    def sort_and_check_stages(cls, v: list[PipelineStage]) -> list[PipelineStage]:
        """Keep stages ordered and reject duplicate stage ids."""
        ids = [s.id for s in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Pipeline stage ids must be unique")
        return sorted(v, key=lambda s: s.order)

    @property
    def stage_ids(self) -> list[str]:
        return [s.id for s in self.stages]

    def get_stage(self, stage_id: str) -> Optional[PipelineStage]:
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        return None

    class Settings:
        """MongoDB collection settings."""

        name = "pipelines"
        indexes = [
            "name",
            "is_default",
            "created_at",
        ]


class PipelineCreate(BaseModel):
    """Schema for creating a pipeline."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: Literal["candidate", "interview", "custom"] = "candidate"
    stages: list[PipelineStage] = Field(default_factory=list)


def _stage(id: str, name: str, description: str, color: str, icon: str, order: int, is_default: bool = False) -> PipelineStage:
    return PipelineStage(
        id=id, name=name, description=description, color=color, icon=icon, order=order, is_default=is_default
    )


DEFAULT_PIPELINE_TEMPLATES: dict[str, PipelineCreate] = {
    "standard": PipelineCreate(
        name="Standard Hiring Pipeline",
        description="Traditional recruitment workflow",
        stages=[
            _stage("new", "New Applications", "Recently submitted applications", "#3b82f6", "📥", 1, True),
            _stage("screening", "Screening", "Initial review", "#8b5cf6", "🔍", 2, True),
            _stage("interviewing", "Interviewing", "Interview process", "#f59e0b", "💬", 3, True),
            _stage("offer_extended", "Offer Extended", "Offer sent", "#10b981", "🎁", 4, True),
            _stage("hired", "Hired", "Successfully hired", "#22c55e", "🎉", 5, True),
        ],
    ),
    "technical": PipelineCreate(
        name="Technical Hiring Pipeline",
        description="For engineering and technical roles",
        stages=[
            _stage("new", "New Applications", "Recently submitted", "#3b82f6", "📥", 1),
            _stage("screening", "Resume Screening", "Initial review", "#8b5cf6", "🔍", 2),
            _stage("technical_test", "Technical Test", "Coding assessment", "#06b6d4", "💻", 3),
            _stage("technical_interview", "Technical Interview", "Deep dive technical", "#f59e0b", "🔧", 4),
            _stage("behavioral", "Behavioral Interview", "Culture fit", "#ec4899", "👥", 5),
            _stage("offer", "Offer", "Offer extended", "#10b981", "🎁", 6),
            _stage("hired", "Hired", "Onboarding", "#22c55e", "🎉", 7),
        ],
    ),
    "sales": PipelineCreate(
        name="Sales Hiring Pipeline",
        description="For sales and business development roles",
        stages=[
            _stage("new", "New Applications", "Initial applications", "#3b82f6", "📥", 1),
            _stage("phone_screen", "Phone Screen", "Quick assessment", "#8b5cf6", "📞", 2),
            _stage("sales_assessment", "Sales Assessment", "Role play or test", "#06b6d4", "📊", 3),
            _stage("manager_interview", "Manager Interview", "Hiring manager", "#f59e0b", "👔", 4),
            _stage("final_interview", "Final Interview", "Leadership team", "#ec4899", "⭐", 5),
            _stage("offer", "Offer", "Offer extended", "#10b981", "🎁", 6),
            _stage("hired", "Hired", "Successfully hired", "#22c55e", "🎉", 7),
        ],
    ),
}
