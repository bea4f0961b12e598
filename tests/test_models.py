"""Tests for vocabulary tables, entries and configuration."""

import pytest

from oval_syschar.models import (
    SYSCHAR_NAMESPACE,
    Datatype,
    Family,
    MessageLevel,
    Subtype,
    SysEnt,
    SyscharConfig,
    SyscharStatus,
    VocabularyError,
)
from oval_syschar.models.vocabulary import (
    _SUBTYPE_DEFINITIONS,
    build_tag_tables,
    family_of,
    item_tag,
    namespace_prefixes,
    subtype_from_tag,
    text_of,
)


class TestSubtypeTable:
    def test_every_known_subtype_has_a_tag(self):
        for subtype in Subtype:
            if subtype is Subtype.UNKNOWN:
                continue
            tag = item_tag(subtype)
            assert tag.local_name.endswith("_item")
            assert tag.namespace.startswith(SYSCHAR_NAMESPACE + "#")

    def test_unix_file_tag(self):
        tag = item_tag(Subtype.UNIX_FILE)
        assert tag.family == Family.UNIX
        assert tag.namespace == SYSCHAR_NAMESPACE + "#unix"
        assert tag.local_name == "file_item"

    def test_shared_token_across_families(self):
        assert text_of(Subtype.UNIX_FILE) == text_of(Subtype.WINDOWS_FILE) == "file"
        assert item_tag(Subtype.UNIX_FILE).namespace != item_tag(Subtype.WINDOWS_FILE).namespace

    def test_reverse_lookup(self):
        assert subtype_from_tag(SYSCHAR_NAMESPACE + "#windows", "registry_item") == Subtype.WINDOWS_REGISTRY
        assert subtype_from_tag(SYSCHAR_NAMESPACE + "#linux", "rpminfo_item") == Subtype.LINUX_RPM_INFO

    def test_reverse_lookup_unknown(self):
        assert subtype_from_tag(SYSCHAR_NAMESPACE + "#unix", "registry_item") == Subtype.UNKNOWN
        assert subtype_from_tag(None, "file_item") == Subtype.UNKNOWN
        assert subtype_from_tag("urn:other", "file_item") == Subtype.UNKNOWN

    def test_unknown_has_no_tag(self):
        with pytest.raises(VocabularyError):
            item_tag(Subtype.UNKNOWN)
        assert family_of(Subtype.UNKNOWN) is None
        assert text_of(Subtype.UNKNOWN) == "unknown"

    def test_family_of(self):
        assert family_of(Subtype.TEXT_FILE_CONTENT54) == Family.INDEPENDENT
        assert family_of(Subtype.MACOS_PLIST) == Family.MACOS

    def test_incomplete_table_rejected(self):
        definitions = dict(_SUBTYPE_DEFINITIONS)
        del definitions[Subtype.UNIX_SHADOW]
        with pytest.raises(VocabularyError, match="UNIX_SHADOW"):
            build_tag_tables(definitions)

    def test_ambiguous_table_rejected(self):
        definitions = dict(_SUBTYPE_DEFINITIONS)
        definitions[Subtype.WINDOWS_FILE] = (Family.UNIX, "file")
        with pytest.raises(VocabularyError):
            build_tag_tables(definitions)

    def test_unknown_definition_rejected(self):
        definitions = dict(_SUBTYPE_DEFINITIONS)
        definitions[Subtype.UNKNOWN] = (Family.UNIX, "unknown")
        with pytest.raises(VocabularyError):
            build_tag_tables(definitions)

    def test_namespace_prefixes(self):
        prefixes = namespace_prefixes()
        assert prefixes[SYSCHAR_NAMESPACE] == "oval-sc"
        assert prefixes[SYSCHAR_NAMESPACE + "#unix"] == "unix-sc"
        assert len(prefixes) == len(Family) + 1


class TestEnumParsing:
    def test_status_text(self):
        assert SyscharStatus.parse("does not exist", SyscharStatus.EXISTS) == SyscharStatus.DOES_NOT_EXIST
        assert SyscharStatus.NOT_COLLECTED.text == "not collected"

    def test_status_hyphenated_alias(self):
        assert SyscharStatus.parse("does-not-exist", SyscharStatus.EXISTS) == SyscharStatus.DOES_NOT_EXIST
        assert SyscharStatus.parse("not-applicable", SyscharStatus.EXISTS) == SyscharStatus.NOT_APPLICABLE

    def test_status_defaults(self):
        assert SyscharStatus.parse(None, SyscharStatus.EXISTS) == SyscharStatus.EXISTS
        assert SyscharStatus.parse("bogus", SyscharStatus.UNKNOWN) == SyscharStatus.UNKNOWN

    def test_message_level(self):
        assert MessageLevel.parse("fatal", MessageLevel.INFO) == MessageLevel.FATAL
        assert MessageLevel.parse(None, MessageLevel.INFO) == MessageLevel.INFO
        assert MessageLevel.parse("loud", MessageLevel.INFO) == MessageLevel.INFO

    def test_datatype_unrecognised_is_unknown(self):
        assert Datatype.parse("int", Datatype.STRING) == Datatype.INT
        assert Datatype.parse(None, Datatype.STRING) == Datatype.STRING
        assert Datatype.parse("complex", Datatype.STRING) == Datatype.UNKNOWN


class TestSysEnt:
    def test_defaults(self):
        entry = SysEnt(name="path", value="/etc")
        assert entry.datatype == Datatype.STRING
        assert entry.status == SyscharStatus.EXISTS
        assert entry.mask is False
        assert entry.is_valid()

    def test_invalid_entries(self):
        assert not SysEnt(name="", value="x").is_valid()
        assert not SysEnt(name="size", value="x", datatype=Datatype.UNKNOWN).is_valid()

    def test_clone_is_independent(self):
        entry = SysEnt(name="size", value="10", datatype=Datatype.INT)
        copy = entry.clone()
        copy.value = "20"
        assert entry.value == "10"
        assert copy.datatype == Datatype.INT

    def test_missing_value_is_empty(self):
        assert SysEnt(name="path").value == ""
        assert SysEnt(name="path", value=None).value == ""


class TestSyscharConfig:
    def test_defaults(self):
        config = SyscharConfig()
        assert config.default_item_status == SyscharStatus.EXISTS
        assert config.default_message_level == MessageLevel.INFO
        assert config.default_entry_datatype == Datatype.STRING
        assert config.xml_declaration is True
        assert config.indent is False
