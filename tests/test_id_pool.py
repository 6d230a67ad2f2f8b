from concurrent.futures import ThreadPoolExecutor

import pytest

from vaccelrt.errors import ErrorCode, VaccelError
from vaccelrt.id_pool import IdPool


def test_zero_ids_is_invalid():
    with pytest.raises(VaccelError) as info:
        IdPool(0)
    assert info.value.code == ErrorCode.EINVAL


def test_ids_are_handed_out_in_order_starting_at_one():
    pool = IdPool(5)
    ids = [pool.get() for _ in range(5)]
    assert ids == list(range(1, 6))


def test_exhausted_pool_returns_zero():
    pool = IdPool(2)
    pool.get()
    pool.get()
    assert pool.get() == 0
    assert pool.get() == 0
    assert len(pool) == 0


def test_released_id_is_reused():
    pool = IdPool(4)
    first = pool.get()
    second = pool.get()
    pool.release(first)
    assert pool.get() == first
    assert second != first


def test_release_after_exhaustion_makes_id_available():
    pool = IdPool(3)
    ids = [pool.get() for _ in range(3)]
    assert pool.get() == 0
    pool.release(ids[1])
    assert pool.get() == ids[1]


def test_invalid_release_is_ignored():
    pool = IdPool(3)
    pool.get()
    before = len(pool)
    pool.release(0)
    pool.release(4)
    assert len(pool) == before


def test_release_on_fresh_pool_is_ignored():
    pool = IdPool(3)
    pool.release(2)
    assert [pool.get() for _ in range(3)] == [1, 2, 3]


def test_concurrent_gets_are_unique():
    size = 200
    pool = IdPool(size)
    with ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(lambda _: pool.get(), range(size)))
    assert sorted(results) == list(range(1, size + 1))
    assert pool.get() == 0