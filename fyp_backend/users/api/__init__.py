"""
User API controllers.
"""

from fyp_backend.users.api.auth import AuthController
from fyp_backend.users.api.managers import UserManagementController

__all__ = ["AuthController", "UserManagementController"]
