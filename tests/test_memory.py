"""Tests for the memory register."""

from calcpad.memory import MemoryRegister


def test_starts_empty():
    mem = MemoryRegister()
    assert mem.recall() == 0
    assert not mem.has_value()


def test_add_and_subtract_accumulate():
    mem = MemoryRegister()
    mem.add(10)
    mem.add(2.5)
    mem.subtract(0.5)
    assert mem.recall() == 12
    assert mem.has_value()


def test_clear():
    mem = MemoryRegister(7)
    mem.clear()
    assert mem.value == 0


def test_listeners_receive_new_value():
    mem = MemoryRegister()
    seen = []
    detach = mem.subscribe(seen.append)
    mem.add(3)
    mem.set_value(9)
    detach()
    mem.clear()
    assert seen == [3.0, 9.0]


def test_dict_round_trip():
    mem = MemoryRegister(4.25)
    other = MemoryRegister()
    assert other.load_dict(mem.to_dict())
    assert other.value == 4.25


def test_load_dict_ignores_bad_payloads():
    mem = MemoryRegister(1)
    assert not mem.load_dict({"memoryValue": "12"})
    assert not mem.load_dict({"memoryValue": True})
    assert not mem.load_dict(None)
    assert mem.value == 1
