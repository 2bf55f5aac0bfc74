"""
Result structures returned by record lookups and queries.

A ResultSet plays the part of a PhyloWS "project": it holds taxa blocks,
a base URL, a GUID and the namespace table that qualifies every metadata
predicate. Entities carry an explicit EntityKind so serializers can switch
on it instead of inspecting class names.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional


class EntityKind(str, Enum):
    PROJECT = "project"
    TAXA = "taxa"
    TAXON = "taxon"
    META = "meta"


@dataclass(frozen=True)
class Meta:
    """A namespaced predicate/value pair, e.g. ``dc:subject -> Homo sapiens``."""

    predicate: str
    value: str
    kind: EntityKind = field(default=EntityKind.META, init=False, compare=False)

    @property
    def prefix(self) -> Optional[str]:
        if ":" not in self.predicate:
            return None
        return self.predicate.split(":", 1)[0]

    def is_resource(self) -> bool:
        return self.value.startswith(("http://", "https://", "urn:"))

    def to_dict(self) -> Dict[str, str]:
        return {"predicate": self.predicate, "value": self.value}


@dataclass
class TaxonEntry:
    name: str = ""
    guid: Optional[str] = None
    base_url: Optional[str] = None
    description: str = ""
    meta: List[Meta] = field(default_factory=list)
    kind: EntityKind = field(default=EntityKind.TAXON, init=False)

    def add_meta(self, predicate: str, value: str) -> Meta:
        statement = Meta(predicate, value)
        self.meta.append(statement)
        return statement

    def get_meta_object(self, predicate: str) -> Optional[str]:
        """Return the value of the first statement with this predicate."""
        for statement in self.meta:
            if statement.predicate == predicate:
                return statement.value
        return None

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "guid": self.guid,
            "base_url": self.base_url,
            "description": self.description,
            "meta": [m.to_dict() for m in self.meta],
        }


@dataclass
class Taxa:
    """An ordered block of taxon entries with block-level statements."""

    entries: List[TaxonEntry] = field(default_factory=list)
    meta: List[Meta] = field(default_factory=list)
    kind: EntityKind = field(default=EntityKind.TAXA, init=False)

    def insert(self, entry: TaxonEntry) -> None:
        self.entries.append(entry)

    def add_meta(self, predicate: str, value: str) -> Meta:
        statement = Meta(predicate, value)
        self.meta.append(statement)
        return statement

    def first(self) -> Optional[TaxonEntry]:
        return self.entries[0] if self.entries else None

    def __iter__(self) -> Iterator[TaxonEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict:
        return {
            "meta": [m.to_dict() for m in self.meta],
            "taxa": [e.to_dict() for e in self.entries],
        }


@dataclass
class ResultSet:
    taxa: List[Taxa] = field(default_factory=list)
    base_url: Optional[str] = None
    guid: Optional[str] = None
    namespaces: Dict[str, str] = field(default_factory=dict)
    kind: EntityKind = field(default=EntityKind.PROJECT, init=False)

    def add_taxa(self, block: Taxa) -> Taxa:
        self.taxa.append(block)
        return block

    def first_taxon(self) -> Optional[TaxonEntry]:
        for block in self.taxa:
            if block.entries:
                return block.entries[0]
        return None

    def entries(self) -> List[TaxonEntry]:
        return [entry for block in self.taxa for entry in block.entries]

    def set_namespaces(self, namespaces: Dict[str, str]) -> None:
        """Union a namespace table in; prefixes already present are kept."""
        for prefix, uri in namespaces.items():
            self.namespaces.setdefault(prefix, uri)

    def undeclared_prefixes(self) -> List[str]:
        """Prefixes used by any statement but missing from the namespace table."""
        missing: List[str] = []
        for block in self.taxa:
            statements = list(block.meta)
            for entry in block.entries:
                statements.extend(entry.meta)
            for statement in statements:
                prefix = statement.prefix
                if prefix and prefix not in self.namespaces and prefix not in missing:
                    missing.append(prefix)
        return missing

    def to_dict(self) -> Dict:
        return {
            "guid": self.guid,
            "base_url": self.base_url,
            "namespaces": dict(self.namespaces),
            "taxa": [block.to_dict() for block in self.taxa],
        }
