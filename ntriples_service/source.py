import asyncio
import os
from datetime import datetime, timezone

import aiofiles
import aiohttp
from aiofiles.os import stat
from bs4 import BeautifulSoup
from tqdm import tqdm

from ntriples_service.config import ACCEPT_HEADER, FETCH_TIMEOUT, HTML_CONTENT_TYPES
from ntriples_service.exceptions import SourceUnavailable, UnsupportedSource

REMOTE_SCHEMES = ('http://', 'https://')
READ_CHUNK_SIZE = 64 * 1024


def is_remote(source):
    return source.startswith(REMOTE_SCHEMES)


async def load_document(source, session=None):
    """
    Get the text of a document, either from a URL or from a local path.

    :param source: an http(s) URL or a file path
    :param session: optional aiohttp session to reuse for URLs
    :return: the document text
    """
    if is_remote(source):
        return await fetch_document(source, session=session)
    elif '://' in source:
        raise UnsupportedSource(f'Only http(s) URLs can be fetched: {source}')
    return await read_document(source)


async def fetch_document(uri, session=None):
    if not is_remote(uri):
        raise UnsupportedSource(f'Only http(s) URLs can be fetched: {uri}')

    if session is None:
        async with aiohttp.ClientSession(raise_for_status=True) as session:
            return await fetch_document(uri, session=session)

    timeout = aiohttp.ClientTimeout(total=FETCH_TIMEOUT)
    headers = {'Accept': ACCEPT_HEADER}
    try:
        async with session.get(uri, headers=headers, timeout=timeout) as response:
            response.raise_for_status()
            text = await response.text(errors='replace')
            content_type = response.content_type
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise SourceUnavailable(f'Could not GET {uri}: {e!r}') from e

    if content_type in HTML_CONTENT_TYPES:
        return extract_statement_text(text)
    return text


def extract_statement_text(html):
    """
    Pull the statements out of an HTML page that displays a document.

    Pages usually wrap the serialization in `<pre>` blocks; if there are
    none, the text of the whole page is used.
    """
    soup = BeautifulSoup(html, 'html.parser')
    blocks = soup.find_all('pre')
    if blocks:
        return '\n'.join(block.get_text() for block in blocks)
    return soup.get_text()


async def read_document(file_path):
    if not os.path.isfile(file_path):
        raise SourceUnavailable(f'No such file: {file_path}')

    chunks = []
    async with aiofiles.open(file_path, 'r', encoding='utf8', errors='replace') as af:
        file_stats = await stat(file_path)
        with tqdm(
            total=file_stats.st_size,
            desc=os.path.basename(file_path),
            unit='b',
            unit_scale=True,
            unit_divisor=1024,
            disable=None,
        ) as progress_bar:
            while True:
                chunk = await af.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
                progress_bar.update(len(chunk.encode('utf8')))

    print_with_timestamp(f'Finished reading {file_path}')
    return ''.join(chunks)


def get_timestamp():
    return datetime.now(timezone.utc).astimezone().isoformat(timespec='seconds')


def print_with_timestamp(message):
    now = get_timestamp()
    print(f'[{now}] {message}', flush=True)
