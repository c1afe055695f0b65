from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ntriples_service.node import NodePart, Triple
from ntriples_service.parser import RESOURCE_FORMAT

SerializedNode = Dict[str, str]
QueryResponse = Dict[str, Any]


def serialize_node(node: NodePart) -> SerializedNode:
    fields = {'label': node.label}
    if node.identifier:
        fields['identifier'] = node.identifier
    return fields


def serialize_triple(triple: Triple) -> Dict[str, SerializedNode]:
    return {
        position: serialize_node(node)
        for position, node in zip(Triple._fields, triple)
    }


def build_response(
    triples: Sequence[Triple],
    source_label: str,
    malformed: int = 0,
) -> QueryResponse:
    """
    Wrap parsed triples in the envelope returned to API clients.

    Note that the `identifier` of a typed literal object is its datatype IRI.
    """
    serialized: List[Dict[str, SerializedNode]] = [
        serialize_triple(triple) for triple in triples
    ]
    return {
        'triples': serialized,
        'resourceFormat': RESOURCE_FORMAT,
        'source': source_label,
        'count': len(serialized),
        'malformed': malformed,
    }
