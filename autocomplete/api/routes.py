from __future__ import annotations

import msgspec
from aiohttp import web

from autocomplete.api.models import (
    AddWords,
    Credentials,
    DeleteWord,
    Endpoint,
    ExistsResponse,
    Overview,
    StatusResponse,
    TokenResponse,
    WordsResponse,
    json_response,
)
from autocomplete.api.state import issuer_key, service_key
from autocomplete.core import Autocomplete, WordQuery
from autocomplete.errors import BadRequest
from autocomplete.utils.wrappers import executor_function

auth_routes = web.RouteTableDef()
routes = web.RouteTableDef()

ENDPOINTS = (
    Endpoint("POST", "/api/login", "Authenticate, generate token"),
    Endpoint("POST", "/api/v1/words", "Add words to the index"),
    Endpoint("GET", "/api/v1/words", "Look up words that start with a given prefix or retrieve all words"),
    Endpoint("DELETE", "/api/v1/words", "Delete a word from the index or clear all words"),
    Endpoint("GET", "/api/v1/words/exists", "Check if a word exists in the index"),
)

_lookup = executor_function(Autocomplete.lookup)
_exists = executor_function(Autocomplete.exists)
_add = executor_function(Autocomplete.add)
_remove = executor_function(Autocomplete.remove)


def _int_param(request: web.Request, name: str) -> int | None:
    if not (value := request.query.get(name, "")):
        return None
    try:
        return int(value)
    except ValueError:
        msg = f"'{name}' must be an integer, got {value!r}"
        raise BadRequest(msg) from None


@auth_routes.post("/api/login")
async def login(request: web.Request) -> web.Response:
    credentials = msgspec.json.decode(await request.read(), type=Credentials)
    token = request.config_dict[issuer_key].authenticate(credentials.username, credentials.password)
    return json_response(TokenResponse(token))


@routes.get("/")
async def overview(request: web.Request) -> web.Response:
    return json_response(Overview("Welcome to the trie-based autocomplete API", ENDPOINTS))


@routes.post("/words")
async def add_words(request: web.Request) -> web.Response:
    body = msgspec.json.decode(await request.read(), type=AddWords)
    added = await _add(request.config_dict[service_key], body.words)
    return json_response(StatusResponse("Words added successfully.", added=added))


@routes.get("/words")
async def list_words(request: web.Request) -> web.Response:
    query = WordQuery(
        prefix=request.query.get("prefix", ""),
        contains=request.query.get("contains", ""),
        offset=_int_param(request, "offset") or 0,
        limit=_int_param(request, "limit"),
    )
    result = await _lookup(request.config_dict[service_key], query)
    return json_response(WordsResponse(result.count, result.total, result.words))


@routes.delete("/words")
async def delete_words(request: web.Request) -> web.Response:
    body = msgspec.json.decode(await request.read(), type=DeleteWord)
    await _remove(request.config_dict[service_key], body.word)
    return json_response(StatusResponse("Word(s) deleted successfully."))


@routes.get("/words/exists")
async def word_exists(request: web.Request) -> web.Response:
    if not (word := request.query.get("word", "")):
        msg = "Missing 'word' query parameter"
        raise BadRequest(msg)

    exists = await _exists(request.config_dict[service_key], word)
    return json_response(ExistsResponse(exists))
