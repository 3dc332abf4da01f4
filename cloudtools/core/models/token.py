"""
IAM token response model.

The identity endpoint answers with either an ``access_token`` or an
``errorMessage`` (plus ``errorCode`` and friends).  Unknown fields are
ignored; nothing here is persisted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class IamTokenResponse(BaseModel):
    """Parsed JSON body of ``POST /identity/token``."""

    model_config = ConfigDict(extra="ignore")

    access_token: str | None = None
    refresh_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    expiration: int | None = None
    errorCode: str | None = None
    errorMessage: str | None = None
