from __future__ import annotations

import logging
from typing import Dict, Iterator, List, NamedTuple, Optional

from ntriples_service.node import NodeKind, NodePart, Triple, classify

#######
# NTriples parsing
#######

RESOURCE_FORMAT = 'N-Triple'
BLANK_NODE_MARKER = '_:'
DATATYPE_MARKER = '^^'
ESCAPED_QUOTE = '\\"'
# private use code points, so they never show up in real documents
QUOTE_PLACEHOLDER = '\ue000\ue001'

SUBJECT = 'subject'
PREDICATE = 'predicate'
OBJECT = 'object'
POSITIONS = (SUBJECT, PREDICATE, OBJECT)

logger = logging.getLogger(__name__)


class ParsedStatement(NamedTuple):
    triple: Triple
    well_formed: bool


class StatementSlots:
    """
    Collects the raw node texts of one statement.

    Blank nodes and literals claim their positions first; `<...>` fragments
    then go to whichever positions are still open, not to a fixed index.
    """

    def __init__(self):
        self.texts: Dict[str, Optional[str]] = dict.fromkeys(POSITIONS)
        self.kinds: Dict[str, Optional[NodeKind]] = dict.fromkeys(POSITIONS)

    def is_filled(self, position: str) -> bool:
        return bool(self.texts[position])

    def fill(self, position: str, text: str, kind: NodeKind) -> None:
        self.texts[position] = text
        self.kinds[position] = kind

    def fill_iri(self, ordinal: int, iri: str) -> Optional[str]:
        """
        Assign the `ordinal`-th bracketed fragment of the line (0-based).

        Returns the position that was filled, or None if the fragment
        was skipped.
        """
        if ordinal == 0:
            position = PREDICATE if self.is_filled(SUBJECT) else SUBJECT
        elif ordinal == 1:
            if not self.is_filled(PREDICATE):
                position = PREDICATE
            elif not self.is_filled(OBJECT):
                position = OBJECT
            else:
                return None
        elif ordinal == 2 and not self.is_filled(OBJECT):
            position = OBJECT
        else:
            return None

        self.fill(position, iri, NodeKind.IRI)
        return position

    def node(self, position: str) -> NodePart:
        return classify(self.texts[position], self.kinds[position])

    def triple(self) -> Triple:
        return Triple(*(self.node(position) for position in POSITIONS))

    def all_filled(self) -> bool:
        return all(self.is_filled(position) for position in POSITIONS)


def blank_node_token(fragment: str) -> str:
    return BLANK_NODE_MARKER + fragment.split(' ')[0]


def find_blank_nodes(line: str, slots: StatementSlots) -> int:
    """Fill blank-node subject/object slots and return how many markers were seen."""
    fragments = line.split(BLANK_NODE_MARKER)
    if len(fragments) > 1:
        position = SUBJECT if not fragments[0] else OBJECT
        slots.fill(position, blank_node_token(fragments[1]), NodeKind.BLANK)
    if len(fragments) > 2:
        slots.fill(OBJECT, blank_node_token(fragments[2]), NodeKind.BLANK)
    return len(fragments) - 1


def find_literal(masked_line: str, slots: StatementSlots) -> int:
    """Fill the object slot with quoted literal text and return the quote count."""
    quoted = masked_line.split('"')
    if len(quoted) > 1:
        literal = quoted[1].replace(QUOTE_PLACEHOLDER, '"')
        slots.fill(OBJECT, literal, NodeKind.LITERAL)
    return len(quoted) - 1


def find_iris(masked_line: str, slots: StatementSlots) -> None:
    bracketed = masked_line.split('<')[1:]
    for ordinal, fragment in enumerate(bracketed):
        slots.fill_iri(ordinal, fragment.split('>')[0])


def find_datatype(masked_line: str) -> Optional[str]:
    """
    Return the IRI of the next `<...>` after the `^^` that follows the literal.

    None means there is no datatype marker, and '' means a marker without an IRI.
    """
    quoted = masked_line.split('"')
    # a marker inside the literal text does not count
    start = len(quoted[0]) + len(quoted[1]) + 2 if len(quoted) > 2 else 0
    marker = masked_line.find(DATATYPE_MARKER, start)
    if marker < 0:
        return None
    opening = masked_line.find('<', marker)
    if opening < 0:
        return ''
    return masked_line[opening + 1:].split('>')[0]


def with_datatype(obj: NodePart, datatype: str) -> NodePart:
    kind = NodeKind.TYPED_LITERAL if obj.kind is NodeKind.LITERAL else obj.kind
    return obj._replace(identifier=datatype or None, kind=kind)


def parse_statement(line: str) -> ParsedStatement:
    """
    Extract the triple from a single N-Triples statement.

    This is a best-effort pattern match rather than a grammar parse: it
    never raises, and positions it cannot find come back as empty nodes.
    `well_formed` is False whenever the line looked suspicious.
    """
    line = line.strip()
    slots = StatementSlots()

    blank_nodes = find_blank_nodes(line, slots)
    masked_line = line.replace(ESCAPED_QUOTE, QUOTE_PLACEHOLDER)
    quotes = find_literal(masked_line, slots)
    find_iris(masked_line, slots)

    subject, predicate, obj = slots.triple()
    datatype = find_datatype(masked_line)
    if datatype is not None:
        obj = with_datatype(obj, datatype)

    well_formed = (
        slots.all_filled()
        and predicate.kind is NodeKind.IRI
        and subject.kind in (NodeKind.IRI, NodeKind.BLANK)
        and blank_nodes <= 2
        and quotes in (0, 2)
        and datatype != ''
        and line.endswith('.')
    )
    return ParsedStatement(Triple(subject, predicate, obj), well_formed)


def iter_statement_lines(content: str) -> Iterator[str]:
    for line in content.split('\n'):
        line = line.strip()
        if line:
            yield line


def parse_statements(content: str) -> Iterator[ParsedStatement]:
    for line in iter_statement_lines(content):
        yield parse_statement(line)


def parse_document(content: str, source_label: str) -> List[Triple]:
    """
    Parse an N-Triples document into its triples, one per non-empty line.

    :param content: the whole document text
    :param source_label: where the document came from, only used for logging
    :return: the triples in line order
    """
    triples = [parsed.triple for parsed in parse_statements(content)]
    log_processed(len(triples), source_label)
    return triples


def log_processed(count: int, source_label: str) -> None:
    logger.info('Processed %d %s-Items from %s', count, RESOURCE_FORMAT, source_label)
