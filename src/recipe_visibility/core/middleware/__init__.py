"""Custom middleware components."""

from recipe_visibility.core.middleware.logging import LoggingMiddleware
from recipe_visibility.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
