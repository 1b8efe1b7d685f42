from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import msgspec
from aiohttp import hdrs, web

from autocomplete.api.errors import get_error_response
from autocomplete.api.models import ErrorResponse, json_response
from autocomplete.api.state import issuer_key, limiter_key
from autocomplete.errors import AutocompleteError, BadRequest, MissingToken, RateLimited

if TYPE_CHECKING:
    from aiohttp.typedefs import Handler

log = logging.getLogger(__name__)
access_log = logging.getLogger("autocomplete.access")


@web.middleware
async def log_requests(request: web.Request, handler: Handler) -> web.StreamResponse:
    start = time.perf_counter()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as exc:
        status = exc.status
        raise
    finally:
        access_log.info(
            "[%s] %s %s %s %d %.4fs",
            request.method,
            request.path_qs,
            request.remote,
            request.headers.get(hdrs.USER_AGENT, "-"),
            status,
            time.perf_counter() - start,
        )


@web.middleware
async def handle_errors(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except AutocompleteError as error:
        log.debug("%s %s failed: %r", request.method, request.path, error)
        return get_error_response(error)
    except msgspec.DecodeError as error:
        return get_error_response(BadRequest(f"Invalid request body: {error}"))
    except web.HTTPException:
        raise
    except Exception:
        log.exception("Unhandled error in %s %s", request.method, request.path)
        return json_response(ErrorResponse("An unknown error occurred."), status=500)


@web.middleware
async def rate_limit(request: web.Request, handler: Handler) -> web.StreamResponse:
    limiter = request.config_dict[limiter_key]
    if retry_after := limiter.hit(request.remote or "unknown"):
        raise RateLimited(retry_after)
    return await handler(request)


@web.middleware
async def require_token(request: web.Request, handler: Handler) -> web.StreamResponse:
    if not (header := request.headers.get(hdrs.AUTHORIZATION, "")):
        msg = "Missing token"
        raise MissingToken(msg)

    token = header.removeprefix("Bearer ")
    request["claims"] = request.config_dict[issuer_key].verify(token)
    return await handler(request)
