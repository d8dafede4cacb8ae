from fyp_backend.core.api.base import BaseAPI
from fyp_backend.core.api.permissions import AllowAny
from fyp_backend.core.api.permissions import IsAuthenticated
from fyp_backend.core.api.permissions import IsExaminer
from fyp_backend.core.api.permissions import IsManager
from fyp_backend.core.api.permissions import IsModerator
from fyp_backend.core.api.permissions import IsStudent
from fyp_backend.core.api.permissions import IsSupervisor

__all__ = [
    "BaseAPI",
    "IsAuthenticated",
    "IsStudent",
    "IsSupervisor",
    "IsModerator",
    "IsExaminer",
    "IsManager",
    "AllowAny",
]
