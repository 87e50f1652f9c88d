"""SQLAlchemy ORM models.

Importing this package registers every model with ``Base.metadata``.
"""

from framebrew.models.base import Base, IDMixin, TimestampMixin
from framebrew.models.generation_job import TERMINAL_JOB_STATUSES, GenerationJob, JobStatus
from framebrew.models.organization import Organization, OrgPlan, User, UserRole
from framebrew.models.project import Project
from framebrew.models.template import Template
from framebrew.models.video import SourceType, Video, VideoStatus

__all__ = [
    "Base",
    "IDMixin",
    "TimestampMixin",
    "Organization",
    "OrgPlan",
    "User",
    "UserRole",
    "Project",
    "Video",
    "VideoStatus",
    "SourceType",
    "GenerationJob",
    "JobStatus",
    "TERMINAL_JOB_STATUSES",
    "Template",
]
