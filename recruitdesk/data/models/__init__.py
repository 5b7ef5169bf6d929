"""
Pydantic data models and schemas for RecruitDesk.

This module provides all data models used throughout the application,
including database documents, embedded models, and create/update schemas.
"""

# Base models
from .base import (
    Address,
    Attachment,
    BaseDocument,
    EmbeddedModel,
    TimestampMixin,
    new_document_id,
    utc_now,
)

# Client models
from .client import Client, ClientCreate, ClientStatistics, ClientUpdate, ContactPerson

# Job models
from .job import (
    Job,
    JobCreate,
    JobRequirements,
    JobStatistics,
    JobUpdate,
    SalaryRange,
    SkillSet,
)

# Candidate models
from .candidate import (
    Candidate,
    CandidateCreate,
    CandidateUpdate,
    Education,
    JobApplication,
    Language,
    Skill,
    WorkExperience,
)

# Application models
from .application import Application, ApplicationCreate, ApplicationReview, ExpectedSalary

# Team models
from .user import User, UserCreate, UserUpdate

# Pipeline models
from .pipeline import DEFAULT_PIPELINE_TEMPLATES, Pipeline, PipelineCreate, PipelineStage

# Taxonomy models
from .category import Category, CategoryCreate, CategoryNode, CategoryUpdate, build_category_tree
from .tag import Tag, TagCreate, TagUpdate

# Every model stored in its own collection
DOCUMENT_MODELS = (Client, Job, Candidate, Application, User, Pipeline, Category, Tag)

__all__ = [
    # Base
    "Address",
    "Attachment",
    "BaseDocument",
    "EmbeddedModel",
    "TimestampMixin",
    "new_document_id",
    "utc_now",
    # Client
    "Client",
    "ClientCreate",
    "ClientStatistics",
    "ClientUpdate",
    "ContactPerson",
    # Job
    "Job",
    "JobCreate",
    "JobRequirements",
    "JobStatistics",
    "JobUpdate",
    "SalaryRange",
    "SkillSet",
    # Candidate
    "Candidate",
    "CandidateCreate",
    "CandidateUpdate",
    "Education",
    "JobApplication",
    "Language",
    "Skill",
    "WorkExperience",
    # Application
    "Application",
    "ApplicationCreate",
    "ApplicationReview",
    "ExpectedSalary",
    # Team
    "User",
    "UserCreate",
    "UserUpdate",
    # Pipeline
    "DEFAULT_PIPELINE_TEMPLATES",
    "Pipeline",
    "PipelineCreate",
    "PipelineStage",
    # Taxonomy
    "Category",
    "CategoryCreate",
    "CategoryNode",
    "CategoryUpdate",
    "build_category_tree",
    "Tag",
    "TagCreate",
    "TagUpdate",
    # Registry
    "DOCUMENT_MODELS",
]
