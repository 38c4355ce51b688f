"""Tests for the weighted collection."""

from __future__ import annotations

import numpy as np
import pytest

from goblin_sim.sampling.errors import (
    CapacityExceededError,
    IndexOutOfRangeError,
    SlotDisabledError,
    WeightUnderflowError,
)
from goblin_sim.sampling.weight import BigIntWeight, IntWeight, Weight
from goblin_sim.sampling.weighted_collection import WeightedCollection
from goblin_sim.utils.seeding import make_rng


def _four_ones() -> WeightedCollection:
    coll = WeightedCollection.with_capacity(4)
    for _ in range(4):
        coll.push(1)
    return coll


def _active_sum(coll: WeightedCollection) -> int:
    mask = np.array([not coll.is_disabled(i) for i in range(len(coll))], dtype=bool)
    return int(coll.raw_values()[mask].sum()) if len(coll) else 0


# ── basic API ─────────────────────────────────────────────────────────────


def test_fresh_collection_samples_none(fixed_draw) -> None:
    coll = WeightedCollection(4)
    assert len(coll) == 0
    assert coll.sample(fixed_draw(1)) is None
    assert coll.raw_values().tolist() == []


def test_push_records_raw_value() -> None:
    coll = WeightedCollection(3)
    assert coll.push(4) == 0
    assert coll.push(2) == 1
    assert coll.raw_values().tolist() == [4, 2]
    assert coll.total == 6


def test_push_beyond_capacity() -> None:
    coll = WeightedCollection(1)
    coll.push(1)
    with pytest.raises(CapacityExceededError):
        coll.push(1)
    assert len(coll) == 1
    assert len(coll.raw_values()) == 1


def test_add_updates_value_and_weight() -> None:
    coll = _four_ones()
    coll.add(1, 5)
    assert coll.raw_values()[1] == 6
    assert coll.sampler.weight_at(1) == 6
    assert coll.total == 9


def test_add_out_of_range_leaves_state_untouched() -> None:
    coll = _four_ones()
    with pytest.raises(IndexOutOfRangeError):
        coll.add(4, 1)
    assert coll.raw_values().tolist() == [1, 1, 1, 1]


def test_failed_add_does_not_touch_raw_value() -> None:
    coll = _four_ones()
    with pytest.raises(WeightUnderflowError):
        coll.add(0, -5)
    assert coll.raw_values()[0] == 1


def test_disable_keeps_raw_value() -> None:
    coll = _four_ones()
    coll.add(3, 2)
    coll.disable(3)
    assert coll.raw_values().tolist() == [1, 1, 1, 3]
    assert coll.sampler.weight_at(3) == 0
    assert coll.total == 3
    assert coll.is_disabled(3)
    assert coll.disabled_count == 1
    assert coll.active_count == 3


def test_disable_twice_fails() -> None:
    coll = _four_ones()
    coll.disable(0)
    with pytest.raises(SlotDisabledError):
        coll.disable(0)


def test_add_to_disabled_slot_fails() -> None:
    coll = _four_ones()
    coll.disable(2)
    with pytest.raises(SlotDisabledError):
        coll.add(2, 1)
    assert coll.sampler.weight_at(2) == 0


def test_disable_out_of_range() -> None:
    coll = _four_ones()
    with pytest.raises(IndexOutOfRangeError):
        coll.disable(7)


def test_raw_values_is_read_only() -> None:
    coll = _four_ones()
    values = coll.raw_values()
    with pytest.raises(ValueError):
        values[0] = 100
    coll.add(0, 1)  # the collection itself can still write
    assert coll.raw_values()[0] == 2


# ── scenarios ─────────────────────────────────────────────────────────────


def test_all_disabled_samples_none(fixed_draw) -> None:
    coll = _four_ones()
    for i in range(4):
        coll.disable(i)
    assert coll.sample(fixed_draw(1)) is None
    assert coll.total == 0
    assert coll.raw_values().tolist() == [1, 1, 1, 1]


def test_empty_selection_is_recoverable(fixed_draw) -> None:
    coll = WeightedCollection(3)
    coll.push(1)
    coll.disable(0)
    assert coll.sample(fixed_draw(1)) is None
    coll.push(2)
    assert coll.sample(fixed_draw(2)) == 1


def test_disable_and_resample(fixed_draw) -> None:
    coll = _four_ones()
    assert coll.sample(fixed_draw(3)) == 2

    coll.disable(2)
    assert coll.total == 3
    assert coll.sample(fixed_draw(3)) == 3

    coll.add(1, 5)
    assert coll.sampler.weight_at(1) == 6
    assert coll.total == 8


def test_zero_value_slot_can_be_disabled() -> None:
    coll = WeightedCollection(2)
    coll.push(0)
    coll.push(3)
    coll.disable(0)
    assert coll.total == 3
    assert coll.raw_values().tolist() == [0, 3]


# ── invariants under random operations ───────────────────────────────────


def test_random_operations_keep_invariants() -> None:
    ops_rng = np.random.default_rng(5)
    sample_rng = make_rng(9)
    coll = WeightedCollection(300)
    disabled: set[int] = set()

    for _ in range(1000):
        op = ops_rng.integers(0, 4)
        active = [i for i in range(len(coll)) if i not in disabled]

        if op == 0 and len(coll) < coll.capacity:
            coll.push(int(ops_rng.integers(0, 10)))
        elif op == 1 and active:
            coll.add(int(ops_rng.choice(active)), int(ops_rng.integers(0, 5)))
        elif op == 2 and active:
            i = int(ops_rng.choice(active))
            coll.disable(i)
            disabled.add(i)
        else:
            picked = coll.sample(sample_rng)
            if picked is not None:
                assert picked not in disabled
                assert coll.sampler.weight_at(picked) > 0
            else:
                assert coll.total == 0

        assert len(coll.raw_values()) == len(coll.sampler)
        assert coll.total == _active_sum(coll)
        assert coll.disabled_count == len(disabled)


# ── exact bookkeeping across weight kinds ────────────────────────────────


def test_disable_after_add_leaves_exact_zero() -> None:
    coll = WeightedCollection(2, BigIntWeight())
    coll.push(10**20 + 1)
    coll.push(2**64 + 3)
    coll.add(0, 7 * 10**19 + 3)
    coll.disable(0)
    coll.disable(1)
    assert coll.sampler.weight_at(0) == 0
    assert coll.sampler.weight_at(1) == 0
    assert coll.total == 0
    assert coll.raw_values().tolist() == [17 * 10**19 + 4, 2**64 + 3]


@pytest.mark.parametrize("weight", [IntWeight(), BigIntWeight()], ids=lambda w: w.name)
def test_disabled_slot_has_no_leftover_weight(weight: Weight) -> None:
    ops_rng = np.random.default_rng(17)
    for _ in range(50):
        coll = WeightedCollection(4, weight)
        for _ in range(4):
            coll.push(int(ops_rng.integers(1, 10**6)))
        for _ in range(3):
            coll.add(int(ops_rng.integers(0, 4)), int(ops_rng.integers(0, 10**6)))
        coll.disable(1)

        assert coll.sampler.weight_at(1) == 0
        assert coll.total == _active_sum(coll)
        sample_rng = make_rng(0)
        assert all(coll.sample(sample_rng) != 1 for _ in range(20))
