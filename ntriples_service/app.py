from __future__ import annotations

import contextlib
import logging
from typing import List

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ntriples_service.config import DEBUG, LOG_LEVEL
from ntriples_service.exceptions import SourceUnavailable, UnsupportedSource
from ntriples_service.node import Triple
from ntriples_service.parser import log_processed, parse_statements
from ntriples_service.response import build_response
from ntriples_service.source import fetch_document

logging.getLogger('ntriples_service').setLevel(LOG_LEVEL)


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    logger = logging.getLogger('uvicorn')
    logger.info('N-Triples Service is ready for lookups.')
    yield


async def triples_from_uri(request: Request) -> JSONResponse:
    uri = request.query_params.get('uri')
    if not uri:
        return JSONResponse({
            'uri': 'The `uri` parameter must be provided.'
        }, status_code=400)

    try:
        content = await fetch_document(uri)
    except UnsupportedSource as e:
        return JSONResponse({'uri': uri, 'error': str(e)}, status_code=400)
    except SourceUnavailable as e:
        return source_unavailable(uri, e)

    return triples_response(request, content, uri)


async def triples_from_body(request: Request) -> JSONResponse:
    source_label = request.query_params.get('source', 'request')
    body = await request.body()
    return triples_response(request, body.decode('utf8', errors='replace'), source_label)


def triples_response(request: Request, content: str, source_label: str) -> JSONResponse:
    strict = request.query_params.get('strict') == 'on'
    triples: List[Triple] = []
    malformed = 0
    for parsed in parse_statements(content):
        if not parsed.well_formed:
            malformed += 1
            if strict:
                continue
        triples.append(parsed.triple)

    log_processed(len(triples), source_label)
    return JSONResponse(build_response(triples, source_label, malformed=malformed))


def source_unavailable(uri: str, error: Exception) -> JSONResponse:
    return JSONResponse({
        'uri': uri,
        'error': str(error),
    }, status_code=502)


routes = [
    Route('/triples/', triples_from_uri, methods=['GET']),
    Route('/parse/', triples_from_body, methods=['POST']),
]

app = Starlette(debug=DEBUG, routes=routes, lifespan=lifespan)
