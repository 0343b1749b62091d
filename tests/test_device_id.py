# tests/test_device_id.py

from __future__ import annotations

from pm_tracker.machines.device_id import DEVICE_ID_ALPHABET, generate_device_id


def test_alphabet_has_32_unambiguous_symbols() -> None:
    assert len(DEVICE_ID_ALPHABET) == 32
    assert len(set(DEVICE_ID_ALPHABET)) == 32
    assert not set("OI01") & set(DEVICE_ID_ALPHABET)


def test_thousand_ids_have_the_expected_shape() -> None:
    ids = [generate_device_id() for _ in range(1000)]
    for device_id in ids:
        assert len(device_id) == 11
        assert device_id.startswith("PM-")
        assert set(device_id[3:]) <= set(DEVICE_ID_ALPHABET)
        assert not set("OI01") & set(device_id[3:])
    # 32**8 possibilities: a repeat in 1000 draws would point at a broken RNG
    assert len(set(ids)) > 990
