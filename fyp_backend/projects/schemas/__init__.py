"""
Project and archive schemas.
"""

from fyp_backend.projects.schemas.archive import ArchivedProjectDetailSchema
from fyp_backend.projects.schemas.archive import ArchivedProjectSchema
from fyp_backend.projects.schemas.projects import AssignExaminerResponseSchema
from fyp_backend.projects.schemas.projects import AssignExaminerSchema
from fyp_backend.projects.schemas.projects import ConfirmAssignmentSchema
from fyp_backend.projects.schemas.projects import EvaluationCreateSchema
from fyp_backend.projects.schemas.projects import EvaluationSchema
from fyp_backend.projects.schemas.projects import ExaminerAssignmentSchema
from fyp_backend.projects.schemas.projects import ProjectDetailSchema
from fyp_backend.projects.schemas.projects import ProjectListSchema

__all__ = [
    "ProjectListSchema",
    "ProjectDetailSchema",
    "ExaminerAssignmentSchema",
    "EvaluationSchema",
    "ConfirmAssignmentSchema",
    "AssignExaminerSchema",
    "AssignExaminerResponseSchema",
    "EvaluationCreateSchema",
    "ArchivedProjectSchema",
    "ArchivedProjectDetailSchema",
]
