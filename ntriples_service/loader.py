import asyncio
import logging
import multiprocessing
import sys

from aiorun import run
from tabulate import tabulate

from ntriples_service.config import CPU_COUNT, LOG_LEVEL, PARALLEL_THRESHOLD
from ntriples_service.parser import (
    iter_statement_lines,
    log_processed,
    parse_statement,
)
from ntriples_service.source import load_document, print_with_timestamp

POOL_CHUNK_SIZE = 1000


def parse_in_pool(lines, processes=CPU_COUNT):
    """
    Parse statement lines across worker processes.

    `imap` hands results back in submission order, so the triples line up
    with the input lines exactly as in a sequential parse.
    """
    with multiprocessing.Pool(processes) as pool:
        return list(pool.imap(parse_statement, lines, chunksize=POOL_CHUNK_SIZE))


def parse_content(content, threshold=PARALLEL_THRESHOLD):
    lines = list(iter_statement_lines(content))
    if len(lines) > threshold:
        print_with_timestamp(f'Parsing {len(lines)} statements with {CPU_COUNT} processes')
        return parse_in_pool(lines)
    return [parse_statement(line) for line in lines]


def tabulate_statements(parsed_statements):
    rows = [
        {
            'subject': parsed.triple.subject.label,
            'predicate': parsed.triple.predicate.label,
            'object': parsed.triple.object.label,
            'identifier': parsed.triple.object.identifier or '',
            'ok': '' if parsed.well_formed else '!',
        }
        for parsed in parsed_statements
    ]
    return tabulate(rows, headers='keys')


async def show_triples(source):
    loop = asyncio.get_event_loop()
    try:
        print_with_timestamp(f'Loading {source}')
        content = await load_document(source)
        parsed_statements = parse_content(content)
        log_processed(len(parsed_statements), source)
        print(tabulate_statements(parsed_statements))
        malformed = sum(1 for parsed in parsed_statements if not parsed.well_formed)
        print_with_timestamp(
            f'{len(parsed_statements)} triples, {malformed} not well-formed'
        )
    finally:
        loop.stop()


if __name__ == '__main__':
    assert len(sys.argv) > 1, 'Please provide a URL or a path to an N-Triples file'
    assert len(sys.argv) < 3, f'Please omit the unexpected arguments: {sys.argv[2:]}'
    logging.basicConfig(level=LOG_LEVEL)
    run(show_triples(sys.argv[1]), use_uvloop=True)
