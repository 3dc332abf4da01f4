"""
Domain models — Pydantic types for cloudtools.

    from cloudtools.core.models import InstallRequest, InstallOutcome, BatchResult
"""

from cloudtools.core.models.install import (
    LATEST,
    BatchResult,
    InstallOptions,
    InstallOutcome,
    InstallRequest,
    Platform,
)
from cloudtools.core.models.token import IamTokenResponse

__all__ = [
    "LATEST",
    "BatchResult",
    "IamTokenResponse",
    "InstallOptions",
    "InstallOutcome",
    "InstallRequest",
    "Platform",
]
