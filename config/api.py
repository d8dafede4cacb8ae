"""
Main API configuration for Django Ninja Extra.
All API controllers are automatically registered here.
"""

import importlib
import inspect
import logging

from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from fyp_backend.core.api.base import BaseAPI
from fyp_backend.core.exceptions import APIException

logger = logging.getLogger(__name__)

api = NinjaExtraAPI(
    title="FYP Tracker API",
    version="1.0.0",
    description="Backend API for the final-year project lifecycle",
    docs_url="/docs",
    openapi_url="/openapi.json",
)


@api.exception_handler(APIException)
def handle_api_exception(request: HttpRequest, exc: APIException):
    """Render every service error as ErrorSchema with its status code."""
    status, body = exc.to_response()
    if status >= 500:
        logger.error("%s on %s: %s", exc.code, request.path, exc.message)
    else:
        logger.debug("%s on %s: %s", exc.code, request.path, exc.message)
    return api.create_response(request, body.model_dump(), status=status)


def register_controllers_from_module(api_instance: NinjaExtraAPI, module_path: str) -> None:
    """
    Dynamically import and register API controllers from a module.

    Controllers must inherit from BaseAPI to be registered.
    """
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError:
        logger.debug("Module %s not found, skipping", module_path)
        return

    for attr_name in dir(module):
        attr = getattr(module, attr_name)
        if inspect.isclass(attr) and issubclass(attr, BaseAPI) and attr is not BaseAPI:
            logger.debug("Registering controller: %s.%s", module_path, attr_name)
            api_instance.register_controllers(attr)


# Register controllers from each local app
LOCAL_APPS = [
    "fyp_backend.users",
    "fyp_backend.proposals",
    "fyp_backend.projects",
    "fyp_backend.progress",
    "fyp_backend.notifications",
]

for app in LOCAL_APPS:
    register_controllers_from_module(api, f"{app}.api")
