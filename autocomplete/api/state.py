from aiohttp import web

from autocomplete.core import Autocomplete, RateLimiter, TokenIssuer

service_key = web.AppKey("service", Autocomplete)
issuer_key = web.AppKey("issuer", TokenIssuer)
limiter_key = web.AppKey("limiter", RateLimiter)
