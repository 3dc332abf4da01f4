"""
IBM Cloud IAM — exchange an API key for a bearer token.

One form-encoded POST to ``<endpoint>/identity/token``.  No caching:
every call performs a fresh request.  The API key and the token are
never logged.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from cloudtools.core.config.settings import DEFAULT_IAM_ENDPOINT
from cloudtools.core.errors import ApiError, HttpError, InvalidArgument, MalformedResponse
from cloudtools.core.models.token import IamTokenResponse
from cloudtools.core.services import transport

logger = logging.getLogger(__name__)

GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
TOKEN_PATH = "/identity/token"


def token_url(endpoint: str = DEFAULT_IAM_ENDPOINT) -> str:
    """``https://<host>/identity/token`` for an endpoint with or without scheme."""
    host = endpoint.strip().removeprefix("https://").rstrip("/")
    return f"https://{host}{TOKEN_PATH}"


def parse_token_response(body: str) -> str:
    """Extract the access token from a 200 response body.

    Raises:
        ApiError: The body carries a non-empty ``errorMessage``.
        MalformedResponse: No usable ``access_token``.
    """
    try:
        parsed = IamTokenResponse.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedResponse(
            "Failed to extract access token from response", body=body,
        ) from exc

    if parsed.errorMessage:
        raise ApiError(parsed.errorMessage)

    token = parsed.access_token
    if not token or token == "null":
        raise MalformedResponse("Failed to extract access token from response", body=body)
    return token


def request_bearer_token(api_key: str, endpoint: str = DEFAULT_IAM_ENDPOINT) -> str:
    """Request an IAM bearer token for ``api_key``.

    Args:
        api_key: IBM Cloud API key.
        endpoint: IAM endpoint, e.g. ``https://iam.cloud.ibm.com``.

    Returns:
        The access token string.

    Raises:
        InvalidArgument: Empty API key.
        TransportError: No response after the transport's retries.
        HttpError: Non-200 status (carries status and body).
        ApiError: 200 with an ``errorMessage``.
        MalformedResponse: 200 without a usable ``access_token``.
    """
    if not api_key:
        raise InvalidArgument("An API key is required")

    url = token_url(endpoint)
    logger.info("Requesting IAM token from %s", url)

    resp = transport.post_form(
        url,
        {"grant_type": GRANT_TYPE, "apikey": api_key},
        headers={"Accept": "application/json"},
    )

    if resp.status != 200:
        raise HttpError(resp.status, resp.body)

    return parse_token_response(resp.body)
