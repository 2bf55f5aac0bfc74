"""
Render a ResultSet as JSON, NEXUS or NeXML.

Entities are visited by their EntityKind tag. HTML is not rendered
here: html requests are always redirected to the authority's site.
"""

import json
from typing import Callable, Dict, List
from xml.sax.saxutils import escape, quoteattr

from .errors import ValidationError, ValidationErrorKind
from .models import EntityKind, Meta, ResultSet

NEXML_NAMESPACE = "http://www.nexml.org/2009"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

CONTENT_TYPES = {
    "json": "application/json",
    "nexus": "text/plain",
    "nexml": "application/xml",
}


def to_json(result: ResultSet) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def _nexus_label(name: str) -> str:
    return "'" + name.replace("'", "''") + "'"


def to_nexus(result: ResultSet) -> str:
    lines = ["#NEXUS"]
    if result.guid:
        lines.append(f"[ guid: {result.guid} ]")
    for block in result.taxa:
        labels = [_nexus_label(entry.name or entry.guid or "unnamed") for entry in block]
        lines.append("BEGIN TAXA;")
        lines.append(f"\tDIMENSIONS NTAX={len(labels)};")
        lines.append("\tTAXLABELS")
        lines.extend(f"\t\t{label}" for label in labels)
        lines.append("\t;")
        lines.append("END;")
    return "\n".join(lines) + "\n"


def _nexml_meta(meta: Meta, indent: str) -> str:
    if meta.is_resource():
        return (
            f'{indent}<meta xsi:type="nex:ResourceMeta" rel={quoteattr(meta.predicate)} '
            f'href={quoteattr(meta.value)}/>'
        )
    return (
        f'{indent}<meta xsi:type="nex:LiteralMeta" property={quoteattr(meta.predicate)} '
        f'content={quoteattr(meta.value)}/>'
    )


def _nexml_element(entity, ids: Dict[str, int], indent: str) -> List[str]:
    """Render one entity and its children, switching on its kind."""
    if entity.kind is EntityKind.META:
        return [_nexml_meta(entity, indent)]

    if entity.kind is EntityKind.TAXON:
        ids["otu"] += 1
        attrs = f'id="otu{ids["otu"]}" label={quoteattr(entity.name)}'
        if entity.base_url:
            attrs += f" xml:base={quoteattr(entity.base_url)}"
        lines = [f"{indent}<otu {attrs}>"]
        for meta in entity.meta:
            lines.extend(_nexml_element(meta, ids, indent + "  "))
        lines.append(f"{indent}</otu>")
        return lines

    if entity.kind is EntityKind.TAXA:
        ids["otus"] += 1
        lines = [f'{indent}<otus id="otus{ids["otus"]}">']
        for meta in entity.meta:
            lines.extend(_nexml_element(meta, ids, indent + "  "))
        for entry in entity.entries:
            lines.extend(_nexml_element(entry, ids, indent + "  "))
        lines.append(f"{indent}</otus>")
        return lines

    if entity.kind is EntityKind.PROJECT:
        namespaces = "".join(
            f" xmlns:{prefix}={quoteattr(uri)}" for prefix, uri in sorted(entity.namespaces.items())
        )
        base = f" xml:base={quoteattr(entity.base_url)}" if entity.base_url else ""
        lines = [
            f'{indent}<nex:nexml version="0.9" xmlns={quoteattr(NEXML_NAMESPACE)} '
            f'xmlns:nex={quoteattr(NEXML_NAMESPACE)} xmlns:xsi={quoteattr(XSI_NAMESPACE)}'
            f"{namespaces}{base}>"
        ]
        if entity.guid:
            lines.append(f"{indent}  <!-- guid: {escape(entity.guid.replace('--', '- -'))} -->")
        for block in entity.taxa:
            lines.extend(_nexml_element(block, ids, indent + "  "))
        lines.append(f"{indent}</nex:nexml>")
        return lines

    raise TypeError(f"Cannot render entity of kind {entity.kind!r}")


def to_nexml(result: ResultSet) -> str:
    ids = {"otus": 0, "otu": 0}
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    lines.extend(_nexml_element(result, ids, ""))
    return "\n".join(lines) + "\n"


SERIALIZERS: Dict[str, Callable[[ResultSet], str]] = {
    "json": to_json,
    "nexus": to_nexus,
    "nexml": to_nexml,
}


def serialize(result: ResultSet, format_name: str) -> str:
    serializer = SERIALIZERS.get(format_name)
    if serializer is None:
        raise ValidationError(ValidationErrorKind.UNSUPPORTED_FORMAT, format_name)
    return serializer(result)
