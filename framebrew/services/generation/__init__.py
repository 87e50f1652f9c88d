"""Video generation services.

- trigger: Create generations and manage their jobs
- progression: Walk jobs through their status sequence and publish events
"""

from framebrew.services.generation.progression import (
    JOB_SEQUENCE,
    ProgressionDriver,
    next_status,
    uniform_delay,
)
from framebrew.services.generation.trigger import CANCELLED_ERROR, GenerationService

__all__ = [
    "CANCELLED_ERROR",
    "GenerationService",
    "JOB_SEQUENCE",
    "ProgressionDriver",
    "next_status",
    "uniform_delay",
]
