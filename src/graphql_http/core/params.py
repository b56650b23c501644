"""
GraphQL request parameter extraction.

Parameters are read from the URL query string and the request body.
Query string values take precedence over body values.

Supported body formats:

1. JSON:
   Content-Type: application/json
   {"query": "{ hello }", "variables": {...}, "operationName": "Q"}

2. Form:
   Content-Type: application/x-www-form-urlencoded
   query=%7B%20hello%20%7D&variables=%7B%7D

3. Raw GraphQL:
   Content-Type: application/graphql
   { hello }
"""

from __future__ import annotations

import json
import logging
import re
import zlib
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl

from fastapi import Request

from .errors import BadRequest, UnsupportedMediaType


logger = logging.getLogger(__name__)

JSON_OBJECT_RE = re.compile(r"^[ \t\n\r]*\{")

# charset label -> Python codec
SUPPORTED_CHARSETS = {
    "utf-8": "utf-8",
    "utf8": "utf-8",
    "utf-16": "utf-16",
    "utf-16le": "utf-16-le",
    "utf-16be": "utf-16-be",
    "latin1": "latin-1",
    "iso-8859-1": "latin-1",
}


@dataclass
class GraphQLParams:
    """Parameters of a single GraphQL request."""
    query: Optional[str] = None
    variables: Optional[dict[str, Any]] = None
    operation_name: Optional[str] = None
    raw: bool = False


def parse_content_type(header: Optional[str]) -> tuple[Optional[str], dict[str, str]]:
    """Split a Content-Type header into media type and lowercased parameters."""
    if not header:
        return None, {}
    media_type, *raw_params = header.split(";")
    params = {}
    for item in raw_params:
        name, sep, value = item.partition("=")
        if sep:
            params[name.strip().lower()] = value.strip().strip('"')
    return media_type.strip().lower(), params


def _decompress(body: bytes, encoding: str) -> bytes:
    """Undo Content-Encoding."""
    if encoding in ("", "identity"):
        return body
    try:
        if encoding == "gzip":
            return zlib.decompress(body, 16 + zlib.MAX_WBITS)
        if encoding == "deflate":
            return zlib.decompress(body)
    except zlib.error as e:
        raise BadRequest(f"Invalid body: {e}.")
    raise UnsupportedMediaType(f'Unsupported content-encoding "{encoding}".')


async def read_body(request: Request) -> dict[str, Any]:
    """
    Decode the request body into a parameter mapping.

    Returns an empty mapping when there is no body or its type
    is not understood.

    Raises:
        BadRequest: If a JSON body is malformed
        UnsupportedMediaType: If charset or content-encoding is unsupported
    """
    media_type, type_params = parse_content_type(request.headers.get("content-type"))
    if media_type is None:
        return {}

    raw = await request.body()
    if not raw:
        return {}

    encoding = request.headers.get("content-encoding", "identity").strip().lower()
    raw = _decompress(raw, encoding)

    charset = type_params.get("charset", "utf-8").lower()
    codec = SUPPORTED_CHARSETS.get(charset)
    if codec is None:
        raise UnsupportedMediaType(f'Unsupported charset "{charset.upper()}".')
    text = raw.decode(codec, errors="replace")

    if media_type == "application/graphql":
        return {"query": text}

    if media_type == "application/json":
        if not JSON_OBJECT_RE.match(text):
            raise BadRequest("POST body sent invalid JSON.")
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            raise BadRequest("POST body sent invalid JSON.")

    if media_type == "application/x-www-form-urlencoded":
        return dict(parse_qsl(text, keep_blank_values=True))

    logger.debug(f"Ignoring body with unsupported content type: {media_type}")
    return {}


def _pick(url_data: Mapping[str, Any], body_data: Mapping[str, Any], key: str) -> Any:
    """URL value first, falling back to body value when empty."""
    return url_data.get(key) or body_data.get(key)


def parse_params(url_data: Mapping[str, Any], body_data: Mapping[str, Any]) -> GraphQLParams:
    """
    Build GraphQLParams from query string and body mappings.

    Raises:
        BadRequest: If variables are given as a string that is not valid JSON
    """
    query = _pick(url_data, body_data, "query")
    if not isinstance(query, str):
        query = None

    variables = _pick(url_data, body_data, "variables")
    if isinstance(variables, str):
        try:
            variables = json.loads(variables)
        except json.JSONDecodeError:
            raise BadRequest("Variables are invalid JSON.")
    if not isinstance(variables, dict):
        variables = None

    operation_name = _pick(url_data, body_data, "operationName")
    if not isinstance(operation_name, str):
        operation_name = None

    raw = "raw" in url_data or "raw" in body_data

    return GraphQLParams(
        query=query,
        variables=variables,
        operation_name=operation_name,
        raw=raw,
    )


async def extract_params(request: Request) -> GraphQLParams:
    """Extract GraphQL parameters from a request."""
    body_data = await read_body(request)
    params = parse_params(request.query_params, body_data)
    logger.debug(
        f"Decoded GraphQL params: operation={params.operation_name!r} "
        f"has_query={params.query is not None} raw={params.raw}"
    )
    return params
