from __future__ import annotations

from collections.abc import Mapping

import msgspec
from aiohttp import web


class Credentials(msgspec.Struct):
    username: str
    password: str


class AddWords(msgspec.Struct):
    words: list[str] = []


class DeleteWord(msgspec.Struct):
    word: str = ""


class Endpoint(msgspec.Struct):
    method: str
    endpoint: str
    description: str


class Overview(msgspec.Struct):
    message: str
    endpoints: tuple[Endpoint, ...]
    status: str = "success"


class TokenResponse(msgspec.Struct):
    token: str


class StatusResponse(msgspec.Struct):
    message: str
    status: str = "success"
    added: int | msgspec.UnsetType = msgspec.UNSET


class WordsResponse(msgspec.Struct):
    count: int
    total: int
    data: tuple[str, ...]
    status: str = "success"


class ExistsResponse(msgspec.Struct):
    exists: bool
    status: str = "success"


class ErrorResponse(msgspec.Struct):
    message: str
    status: str = "error"


def json_response(
    obj: object,
    *,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> web.Response:
    return web.Response(
        body=msgspec.json.encode(obj),
        status=status,
        content_type="application/json",
        headers=headers,
    )
