"""
Tests for folding record metadata into search candidates.
"""

from ubiows.merge import merge_metadata
from ubiows.models import Meta, TaxonEntry


def _entry(name, *pairs):
    entry = TaxonEntry(name=name)
    for predicate, value in pairs:
        entry.add_meta(predicate, value)
    return entry


class TestMergeMetadata:
    def test_appends_in_order(self):
        target = _entry("a", ("dc:identifier", "urn:1"), ("ubio:rankName", "species"))
        source = _entry("b", ("gla:rank", "species"), ("dc:title", "B"))
        before = list(target.meta)

        merge_metadata(target, source, {}, {})

        assert len(target.meta) == len(before) + len(source.meta)
        assert target.meta[: len(before)] == before
        assert target.meta[len(before):] == source.meta

    def test_duplicates_accumulate(self):
        target = _entry("a", ("dc:identifier", "urn:1"))
        source = _entry("b", ("dc:identifier", "urn:1"))

        merge_metadata(target, source, {}, {})

        assert target.meta == [Meta("dc:identifier", "urn:1"), Meta("dc:identifier", "urn:1")]

    def test_source_untouched_and_not_aliased(self):
        target = _entry("a")
        source = _entry("b", ("dc:title", "B"))

        merge_metadata(target, source, {}, {})
        target.add_meta("dc:extra", "x")

        assert len(source.meta) == 1
        assert target.meta is not source.meta

    def test_namespaces_first_writer_wins(self):
        target_ns = {"dc": "http://purl.org/dc/elements/1.1/"}
        source_ns = {"dc": "http://other/", "gla": "urn:gla:"}

        merge_metadata(_entry("a"), _entry("b"), target_ns, source_ns)

        assert target_ns == {"dc": "http://purl.org/dc/elements/1.1/", "gla": "urn:gla:"}

    def test_subject_overwrites_name(self):
        target = _entry("Homo sapiens")
        source = _entry("x", ("dc:subject", "Homo sapiens Linnaeus 1758"))

        merge_metadata(target, source, {}, {})

        assert target.name == "Homo sapiens Linnaeus 1758"

    def test_name_kept_without_subject(self):
        target = _entry("Homo sapiens")
        target.guid = "urn:lsid:ubio.org:namebank:1"
        source = _entry("Other", ("dc:title", "Other"))

        merge_metadata(target, source, {}, {})

        assert target.name == "Homo sapiens"
        assert target.guid == "urn:lsid:ubio.org:namebank:1"
