"""
Development settings.

`USE_DOCKER=True` switches cache, sessions and Celery to the compose
Redis service; without it everything runs in-process.
"""

from .base import *  # noqa: F403
from .base import INSTALLED_APPS
from .base import MIDDLEWARE
from .base import env

USE_DOCKER = env.bool("USE_DOCKER", default=False)

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = True
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="p1Xo8oQvCq9ExBzVd4PM0mYh5WcUDWlRfsOaqTpnH2g7LkeJ3iwrNbAtyS6uZGjF",
)
ALLOWED_HOSTS = ["localhost", "127.0.0.1", "fyp-backend"]

# CACHES / SESSIONS
# ------------------------------------------------------------------------------
if USE_DOCKER:
    CACHES = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": env("REDIS_URL", default="redis://redis:6379/0"),
            "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
        },
    }
    SESSION_ENGINE = "django.contrib.sessions.backends.cache"
    SESSION_CACHE_ALIAS = "default"
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "",
        },
    }

SESSION_COOKIE_AGE = 60 * 60 * 12
SESSION_COOKIE_SAMESITE = "Lax"

# CELERY
# ------------------------------------------------------------------------------
# Without a broker the reminder task runs inline when called.
CELERY_TASK_ALWAYS_EAGER = not USE_DOCKER
CELERY_TASK_EAGER_PROPAGATES = True

# CSRF
# ------------------------------------------------------------------------------
CSRF_TRUSTED_ORIGINS = env.list(
    "DJANGO_CSRF_TRUSTED_ORIGINS",
    default=["http://localhost:5173", "http://localhost:3000"],
)
CSRF_COOKIE_SAMESITE = "Lax"
CSRF_COOKIE_HTTPONLY = False

# Static files served by runserver through WhiteNoise
# ------------------------------------------------------------------------------
INSTALLED_APPS = ["whitenoise.runserver_nostatic", *INSTALLED_APPS]

# django-debug-toolbar
# ------------------------------------------------------------------------------
INSTALLED_APPS += ["debug_toolbar"]
MIDDLEWARE += ["debug_toolbar.middleware.DebugToolbarMiddleware"]
DEBUG_TOOLBAR_CONFIG = {
    "DISABLE_PANELS": [
        "debug_toolbar.panels.redirects.RedirectsPanel",
        "debug_toolbar.panels.profiling.ProfilingPanel",
    ],
    "SHOW_TEMPLATE_CONTEXT": True,
}
INTERNAL_IPS = ["127.0.0.1", "10.0.2.2"]
if USE_DOCKER:
    import socket

    hostname, _, ips = socket.gethostbyname_ex(socket.gethostname())
    INTERNAL_IPS += [".".join([*ip.split(".")[:-1], "1"]) for ip in ips]

# django-extensions
# ------------------------------------------------------------------------------
INSTALLED_APPS += ["django_extensions"]

# FYP
# ------------------------------------------------------------------------------
LOGGING["loggers"]["fyp_backend"]["level"] = env("FYP_LOG_LEVEL", default="DEBUG")  # noqa: F405
