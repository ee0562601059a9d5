"""HTTP clients used by the OpenCitations tool layer."""

from .base import (
    BaseHttpClient,
    ClientError,
    DecodeError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    RequestFailedError,
    TransportError,
    UnauthorizedError,
)
from .opencitations import OpenCitationsClient

__all__ = [
    "BaseHttpClient",
    "ClientError",
    "DecodeError",
    "ForbiddenError",
    "NotFoundError",
    "OpenCitationsClient",
    "RateLimitedError",
    "RequestFailedError",
    "TransportError",
    "UnauthorizedError",
]
