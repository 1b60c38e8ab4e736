"""Mapping of domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from orgperms.domain.exceptions import (
    Forbidden,
    InvalidState,
    NotFound,
    OrgPermsError,
    StoreUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = {
    NotFound: falcon.HTTP_404,
    Forbidden: falcon.HTTP_403,
    InvalidState: falcon.HTTP_409,
    ValidationError: falcon.HTTP_400,
    StoreUnavailable: falcon.HTTP_503,
}


def error_response(resp: falcon.asgi.Response, error: OrgPermsError) -> None:
    """Set status and ``{"error", "kind"}`` body for a domain error."""
    resp.status = _STATUS.get(type(error), falcon.HTTP_500)
    resp.media = {"error": str(error), "kind": type(error).__name__}


def unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized", "kind": "Unauthorized"}


def bad_request(resp: falcon.asgi.Response, message: str) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": message, "kind": "ValidationError"}


async def handle_unexpected(req, resp, ex, params) -> None:
    """Last-resort handler: log and answer 500."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error", "kind": "InternalError"}
