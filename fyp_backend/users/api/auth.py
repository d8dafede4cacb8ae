"""
Authentication API controller.

Credentials are checked by Django's `authenticate`; the session then
carries the principal to every other controller.
"""

import logging

from django.contrib.auth import authenticate
from django.contrib.auth import login
from django.contrib.auth import logout
from django.http import HttpRequest
from django.middleware.csrf import get_token
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from fyp_backend.core.api import AllowAny
from fyp_backend.core.api import BaseAPI
from fyp_backend.core.exceptions import AccountDisabledError
from fyp_backend.core.exceptions import ErrorSchema
from fyp_backend.core.exceptions import InvalidCredentialsError
from fyp_backend.core.exceptions import NotAuthenticatedError
from fyp_backend.core.schemas import MessageSchema
from fyp_backend.users.models import User
from fyp_backend.users.schemas import CSRFTokenSchema
from fyp_backend.users.schemas import LoginResponseSchema
from fyp_backend.users.schemas import LoginSchema
from fyp_backend.users.schemas import PrincipalSchema

logger = logging.getLogger(__name__)


@api_controller("/auth", tags=["Authentication"], permissions=[AllowAny])
class AuthController(BaseAPI):
    """Session login, logout and the current principal."""

    @http_get("/csrf", response=CSRFTokenSchema, url_name="auth_csrf")
    def get_csrf_token(self, request: HttpRequest):
        """Get a CSRF token for subsequent POST requests."""
        return CSRFTokenSchema(csrf_token=get_token(request))

    @http_post(
        "/login",
        response={200: LoginResponseSchema, 400: ErrorSchema, 401: ErrorSchema},
        url_name="auth_login",
    )
    def login_view(self, request: HttpRequest, data: LoginSchema):
        """Authenticate user with email and password."""
        user = authenticate(request, username=data.email, password=data.password)

        if user is None:
            # ModelBackend refuses inactive users; tell them apart from bad passwords.
            candidate = User.objects.filter(email__iexact=data.email).first()
            if candidate is not None and not candidate.is_active and candidate.check_password(data.password):
                raise AccountDisabledError()
            logger.info("Failed login for %s", data.email)
            raise InvalidCredentialsError()

        login(request, user)

        return 200, LoginResponseSchema(
            success=True,
            user=PrincipalSchema.from_user(user),
            csrf_token=get_token(request),
        )

    @http_post("/logout", response={200: MessageSchema}, url_name="auth_logout")
    def logout_view(self, request: HttpRequest):
        """Logout the current user and clear session."""
        logout(request)
        return 200, MessageSchema(success=True, message="Logged out.")

    @http_get(
        "/me",
        response={200: PrincipalSchema, 401: ErrorSchema},
        url_name="auth_me",
    )
    def me_view(self, request: HttpRequest):
        """Get the current authenticated user's id and roles."""
        if not request.user.is_authenticated or not request.user.is_active:
            raise NotAuthenticatedError()

        return 200, PrincipalSchema.from_user(request.user)
