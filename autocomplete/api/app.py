from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from aiohttp import web

from autocomplete.api.middleware import handle_errors, log_requests, rate_limit, require_token
from autocomplete.api.routes import auth_routes, routes
from autocomplete.api.state import issuer_key, limiter_key, service_key
from autocomplete.core import Autocomplete, InvalidationPolicy, RateLimiter, TokenIssuer
from autocomplete.utils.cache import TTLCache

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from autocomplete.typedefs import Settings

log = logging.getLogger(__name__)


async def _sweep_forever(service: Autocomplete, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        if removed := service.sweep():
            log.debug("Swept %d expired lookup(s) from the cache", removed)


def _cache_sweeper(interval: float) -> Callable[[web.Application], AsyncIterator[None]]:
    async def sweeper(app: web.Application) -> AsyncIterator[None]:
        task = asyncio.create_task(_sweep_forever(app[service_key], interval))
        yield
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    return sweeper


def create_app(
    service: Autocomplete,
    issuer: TokenIssuer,
    limiter: RateLimiter,
    *,
    sweep_interval: float | None = None,
) -> web.Application:
    """Assemble the HTTP application around already constructed collaborators.

    ``/api/login`` is public; everything under ``/api/v1`` needs a bearer token.
    Every route is rate limited per remote address.
    """
    app = web.Application(middlewares=[log_requests, handle_errors, rate_limit])
    app[service_key] = service
    app[issuer_key] = issuer
    app[limiter_key] = limiter
    app.router.add_routes(auth_routes)

    v1 = web.Application(middlewares=[require_token])
    v1.router.add_routes(routes)
    app.add_subapp("/api/v1", v1)

    if sweep_interval:
        app.cleanup_ctx.append(_cache_sweeper(sweep_interval))

    return app


def build_app(settings: Settings) -> web.Application:
    service = Autocomplete(
        cache=TTLCache(settings.cache_ttl, settings.cache_maxsize),
        policy=InvalidationPolicy(settings.cache_invalidation),
    )
    issuer = TokenIssuer(settings.secret_key, settings.users, lifetime=settings.token_lifetime)
    limiter = RateLimiter(settings.rate_limit, settings.rate_burst)
    return create_app(service, issuer, limiter, sweep_interval=settings.cache_sweep_interval)
