"""
Project API controllers.

- ProjectController: /api/projects/
- ArchiveController: /api/archive/
"""

from fyp_backend.projects.api.archive import ArchiveController
from fyp_backend.projects.api.projects import ProjectController

__all__ = [
    "ArchiveController",
    "ProjectController",
]
