from ntriples_service.loader import parse_content, parse_in_pool, tabulate_statements
from ntriples_service.parser import iter_statement_lines, parse_statements

DOCUMENT = '\n'.join(
    f'<http://ex.org/s{i}> <http://ex.org/p> "value {i}" .' if i % 2 else f'_:b{i} <http://ex.org/p> _:o{i} .'
    for i in range(40)
) + '\nbroken line\n'


def test_pool_keeps_line_order():
    sequential = list(parse_statements(DOCUMENT))
    assert parse_in_pool(list(iter_statement_lines(DOCUMENT)), processes=2) == sequential


def test_parse_content_switches_to_pool_above_threshold():
    assert parse_content(DOCUMENT, threshold=10) == parse_content(DOCUMENT, threshold=1000)
    assert len(parse_content(DOCUMENT, threshold=10)) == 41


def test_tabulate_statements_marks_malformed_lines():
    table = tabulate_statements(parse_content('_:b0 <http://ex.org/p> "x"^^<http://ex.org/dt> .\nbroken\n'))
    lines = table.splitlines()
    assert lines[0].split() == ['subject', 'predicate', 'object', 'identifier', 'ok']
    assert '_:b0' in lines[2]
    assert 'http://ex.org/dt' in lines[2]
    assert lines[3].rstrip().endswith('!')
