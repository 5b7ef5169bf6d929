"""
Database repositories for RecruitDesk data access.

This module provides repository classes for all database collections,
implementing the repository pattern for clean data access.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .client_repository import ClientRepository, get_client_repository
from .job_repository import JobRepository, get_job_repository
from .candidate_repository import CandidateRepository, get_candidate_repository
from .application_repository import ApplicationRepository, get_application_repository
from .user_repository import UserRepository, get_user_repository
from .pipeline_repository import PipelineRepository, get_pipeline_repository
from .category_repository import CategoryRepository, get_category_repository
from .tag_repository import TagRepository, get_tag_repository

__all__ = [
    # Base
    "BaseRepository",
    # Client
    "ClientRepository",
    "get_client_repository",
    # Job
    "JobRepository",
    "get_job_repository",
    # Candidate
    "CandidateRepository",
    "get_candidate_repository",
    # Application
    "ApplicationRepository",
    "get_application_repository",
    # User
    "UserRepository",
    "get_user_repository",
    # Pipeline
    "PipelineRepository",
    "get_pipeline_repository",
    # Category
    "CategoryRepository",
    "get_category_repository",
    # Tag
    "TagRepository",
    "get_tag_repository",
]
