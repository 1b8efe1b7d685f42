import logging
import math
from collections.abc import Mapping

from aiohttp import web

from autocomplete.api.models import ErrorResponse, json_response
from autocomplete.errors import (
    AuthenticationError,
    AutocompleteError,
    BadRequest,
    InvalidCredentials,
    InvalidQuery,
    InvalidToken,
    MissingToken,
    RateLimited,
)

log = logging.getLogger(__name__)

error_responses: Mapping[type[AutocompleteError], tuple[int, str]] = {
    BadRequest: (400, "{}"),
    InvalidQuery: (400, "{}"),
    AuthenticationError: (401, "Unauthorized"),
    MissingToken: (401, "Missing token"),
    InvalidToken: (401, "{}"),
    InvalidCredentials: (401, "Invalid credentials"),
    RateLimited: (429, "Too many requests. Try again in {:.2f} seconds."),
}


def get_error_response(error: AutocompleteError) -> web.Response:
    """Build the JSON response for the given error."""
    try:
        status, template = error_responses[type(error)]
    except KeyError:
        log.error("Unhandled error type %s", type(error).__name__, exc_info=error)
        return json_response(ErrorResponse("An unknown error occurred."), status=500)

    headers: dict[str, str] = {}
    if isinstance(error, RateLimited):
        message = template.format(error.retry_after)
        headers["Retry-After"] = str(math.ceil(error.retry_after))
    else:
        message = template.format(error)

    return json_response(ErrorResponse(message), status=status, headers=headers)
