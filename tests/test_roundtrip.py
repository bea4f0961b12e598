"""Parse → serialize → parse fidelity for whole documents."""

import pytest

from oval_syschar.codec.parser import load_system_characteristics
from oval_syschar.codec.serializer import dump_system_characteristics
from oval_syschar.models import (
    Datatype,
    MessageLevel,
    Subtype,
    SysEnt,
    SyscharConfig,
    SyscharStatus,
)
from oval_syschar.syschar_model.store import SyscharModel


def _make_model(config=None) -> SyscharModel:
    model = SyscharModel(config=config)
    lock = model.lock_state

    file_item = model.create_item("1")
    file_item.set_subtype(Subtype.UNIX_FILE, lock)
    file_item.set_status(SyscharStatus.EXISTS, lock)
    for entry in (
        SysEnt(name="filepath", value="/etc/shadow"),
        SysEnt(name="path", value="/etc"),
        SysEnt(name="filename", value="shadow"),
        SysEnt(name="size", value="1234", datatype=Datatype.INT),
        SysEnt(name="uread", value="true", datatype=Datatype.BOOLEAN),
    ):
        file_item.add_entry(entry, lock)

    registry = model.create_item("2")
    registry.set_subtype(Subtype.WINDOWS_REGISTRY, lock)
    registry.set_status(SyscharStatus.ERROR, lock)
    registry.set_message("access denied", lock)
    registry.set_message_level(MessageLevel.WARNING, lock)
    registry.add_entry(SysEnt(name="hive", value="HKEY_LOCAL_MACHINE"), lock)
    registry.add_entry(SysEnt(name="value", value="secret", mask=True), lock)
    registry.add_entry(SysEnt(name="type", status=SyscharStatus.NOT_COLLECTED), lock)

    rpm = model.create_item("3")
    rpm.set_subtype(Subtype.LINUX_RPM_INFO, lock)
    rpm.set_status(SyscharStatus.DOES_NOT_EXIST, lock)

    family = model.create_item("4")
    family.set_subtype(Subtype.FAMILY, lock)
    family.set_status(SyscharStatus.EXISTS, lock)
    family.add_entry(SysEnt(name="family", value="unix"), lock)
    return model


class TestRoundTrip:
    @pytest.mark.parametrize("indent", [False, True])
    def test_items_survive_round_trip(self, indent):
        original = _make_model(SyscharConfig(indent=indent))
        reparsed = load_system_characteristics(dump_system_characteristics(original))

        assert [i.id for i in reparsed.items()] == [i.id for i in original.items()]
        for item in original.items():
            assert reparsed.get_item(item.id).model_dump() == item.model_dump()

    def test_second_round_trip_is_byte_identical(self):
        first = dump_system_characteristics(_make_model())
        second = dump_system_characteristics(load_system_characteristics(first))
        assert first == second

    def test_reparsed_model_is_valid(self):
        reparsed = load_system_characteristics(dump_system_characteristics(_make_model()))
        assert reparsed.is_valid() is True

    def test_clone_then_serialize_matches(self):
        model = _make_model()
        assert dump_system_characteristics(model.clone()) == dump_system_characteristics(model)

    def test_empty_entry_value_survives(self):
        model = SyscharModel()
        lock = model.lock_state
        item = model.create_item("e")
        item.set_subtype(Subtype.UNIX_FILE, lock)
        item.add_entry(SysEnt(name="path", value=""), lock)
        item.add_entry(SysEnt(name="filename"), lock)

        first = dump_system_characteristics(model)
        reparsed = load_system_characteristics(first)

        entries = reparsed.get_item("e").entries
        assert [(e.name, e.value) for e in entries] == [("path", ""), ("filename", "")]
        assert reparsed.get_item("e").model_dump() == item.model_dump()
        assert dump_system_characteristics(reparsed) == first
