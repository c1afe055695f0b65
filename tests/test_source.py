import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ntriples_service.exceptions import SourceUnavailable, UnsupportedSource
from ntriples_service.source import (
    extract_statement_text,
    fetch_document,
    is_remote,
    load_document,
    read_document,
)

DOCUMENT = '<http://ex.org/s> <http://ex.org/p> "Hello World" .\n'
UNDECODABLE = b'<http://ex.org/s> <http://ex.org/p> "\xff" .\n'
HTML_PAGE = f'''<html><head><title>Data</title></head>
<body><h1>Statements</h1><pre>{DOCUMENT.replace("<", "&lt;").replace(">", "&gt;")}</pre></body></html>'''


async def serve(path, coroutine_factory):
    async def handler(request):
        if request.path == '/doc.nt':
            return web.Response(text=DOCUMENT, content_type='application/n-triples')
        elif request.path == '/page.html':
            return web.Response(text=HTML_PAGE, content_type='text/html')
        elif request.path == '/undecodable.nt':
            return web.Response(body=UNDECODABLE, content_type='application/n-triples', charset='utf-8')
        raise web.HTTPNotFound()

    app = web.Application()
    app.router.add_get('/{name}', handler)
    async with TestServer(app) as server:
        return await coroutine_factory(str(server.make_url(path)))


def test_fetch_plain_document():
    assert asyncio.run(serve('/doc.nt', fetch_document)) == DOCUMENT


def test_fetch_html_page_uses_pre_blocks():
    content = asyncio.run(serve('/page.html', fetch_document))
    assert content == DOCUMENT


def test_fetch_missing_document():
    with pytest.raises(SourceUnavailable):
        asyncio.run(serve('/missing.nt', fetch_document))


def test_fetch_rejects_other_schemes():
    with pytest.raises(UnsupportedSource):
        asyncio.run(fetch_document('ftp://ex.org/doc.nt'))


def test_extract_statement_text_without_pre():
    assert extract_statement_text('<p>_:b0 &lt;http://ex.org/p&gt; _:b1 .</p>') == (
        '_:b0 <http://ex.org/p> _:b1 .'
    )


def test_read_local_document(tmp_path):
    path = tmp_path / 'doc.nt'
    path.write_text(DOCUMENT, encoding='utf8')
    assert asyncio.run(read_document(str(path))) == DOCUMENT
    assert asyncio.run(load_document(str(path))) == DOCUMENT


def test_read_missing_local_document(tmp_path):
    with pytest.raises(SourceUnavailable):
        asyncio.run(read_document(str(tmp_path / 'nope.nt')))


def test_load_document_rejects_other_schemes():
    with pytest.raises(UnsupportedSource):
        asyncio.run(load_document('file:///tmp/doc.nt'))


def test_is_remote():
    assert is_remote('https://ex.org/doc.nt')
    assert not is_remote('/data/doc.nt')


def test_fetch_replaces_undecodable_bytes():
    content = asyncio.run(serve('/undecodable.nt', fetch_document))
    assert content == '<http://ex.org/s> <http://ex.org/p> "\ufffd" .\n'


def test_read_local_document_with_undecodable_bytes(tmp_path):
    path = tmp_path / 'bad.nt'
    path.write_bytes(UNDECODABLE)
    assert asyncio.run(read_document(str(path))) == '<http://ex.org/s> <http://ex.org/p> "\ufffd" .\n'
