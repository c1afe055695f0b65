from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple, Optional

#######
# RDF nodes
#######

# an optional scheme, `//`, then a dotted host or localhost
iri_re = re.compile(
    r'^(?:\w+:)?//(?:[^\s.]+\.\S{2}|localhost[:?\d]*)\S*$'
)


class NodeKind(str, Enum):
    IRI = 'iri'
    BLANK = 'blank'
    LITERAL = 'literal'
    TYPED_LITERAL = 'typed-literal'
    EMPTY = 'empty'


class NodePart(NamedTuple):
    """
    One position of a triple, as shown to a reader.

    `identifier` holds the full IRI of an IRI node. For a typed literal it
    holds the literal's datatype IRI instead, so consumers of the serialized
    triples should check `kind` (or `datatype`) before treating it as a link.

    `kind` records which token the text came from, not whether it passed IRI
    recognition: a bracketed `<urn:...>` is an IRI node without an identifier.
    """
    label: str = ''
    identifier: Optional[str] = None
    kind: NodeKind = NodeKind.EMPTY

    @property
    def datatype(self) -> Optional[str]:
        if self.kind is NodeKind.TYPED_LITERAL:
            return self.identifier
        return None


class Triple(NamedTuple):
    subject: NodePart
    predicate: NodePart
    object: NodePart


def looks_like_iri(text: Optional[str]) -> bool:
    return bool(text) and iri_re.match(text) is not None


def classify(text: Optional[str], kind: Optional[NodeKind] = None) -> NodePart:
    """
    Build the NodePart for a raw node text.

    IRIs are labelled with their last path segment; anything else keeps its
    text as the label. `kind` records which token the text came from and
    defaults to what the text itself looks like.
    """
    if not text:
        return NodePart('', None, kind or NodeKind.EMPTY)

    if looks_like_iri(text):
        label = text.rsplit('/', maxsplit=1)[-1]
        return NodePart(label, text, kind or NodeKind.IRI)

    if kind is None:
        kind = NodeKind.BLANK if text.startswith('_:') else NodeKind.LITERAL
    return NodePart(text, None, kind)
