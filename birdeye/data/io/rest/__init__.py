"""REST transport collaborators."""

from .http import HTTPClient
from .limiter import RateLimiter
from .transport import RESTTransport, render_params

__all__ = ["HTTPClient", "RESTTransport", "RateLimiter", "render_params"]
