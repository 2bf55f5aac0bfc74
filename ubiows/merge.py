from typing import Dict

from .models import Meta, TaxonEntry

# Statement on an authoritative record that carries the corrected name
CANONICAL_NAME_PREDICATE = "dc:subject"


def merge_metadata(
    target: TaxonEntry,
    source: TaxonEntry,
    target_namespaces: Dict[str, str],
    source_namespaces: Dict[str, str],
) -> None:
    """
    Fold the statements of a fetched record into a search candidate.

    Statements are appended in order and never deduplicated, so the
    target grows by exactly len(source.meta). Namespaces are unioned into
    `target_namespaces` with the existing entry winning on conflict.
    A canonical name on the source replaces the target's display name;
    nothing else on the target is overwritten.

    Args:
        target: Candidate entry, mutated in place
        source: Entry from a record lookup, left untouched
        target_namespaces: Namespace table of the result that owns `target`
        source_namespaces: Namespace table of the result that owns `source`
    """
    for statement in list(source.meta):
        target.meta.append(Meta(statement.predicate, statement.value))

    for prefix, uri in source_namespaces.items():
        target_namespaces.setdefault(prefix, uri)

    name = source.get_meta_object(CANONICAL_NAME_PREDICATE)
    if name:
        target.name = name
