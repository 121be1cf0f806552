import pytest

from pinguin.bootparams import MemEntry
from pinguin.buddy import (
    BUDDY_LAYERS,
    PAGE_SIZE,
    POINTER_MAX,
    BuddyAllocator,
    best_fit_layer,
    block_size,
)


def test_sanity_check():
    alloc = BuddyAllocator([MemEntry(2, 100)])
    ptr = alloc.alloc(10)
    assert ptr == 2 * PAGE_SIZE
    alloc.free(ptr)


def test_free_merges_buddies_back():
    alloc = BuddyAllocator([MemEntry(2, 100)])
    ptr = alloc.alloc(10)
    assert alloc.alloc(64) is None
    alloc.free(ptr)
    assert alloc.alloc(64) == 2 * PAGE_SIZE


def test_block_sizes_cover_address_space():
    assert block_size(0) * PAGE_SIZE == POINTER_MAX + 1
    assert block_size(BUDDY_LAYERS - 1) == 1
    for layer in range(1, BUDDY_LAYERS):
        assert block_size(layer - 1) == 2 * block_size(layer)


def test_best_fit_layer():
    assert best_fit_layer(10) == 16
    assert best_fit_layer(1) == BUDDY_LAYERS - 1
    assert best_fit_layer(block_size(0)) == 0
    for pages in (2, 3, 17, 1000):
        layer = best_fit_layer(pages)
        assert block_size(layer) >= pages
        assert layer == BUDDY_LAYERS - 1 or block_size(layer + 1) < pages


def test_bad_layer_and_page_counts():
    with pytest.raises(ValueError):
        block_size(BUDDY_LAYERS)
    with pytest.raises(ValueError):
        best_fit_layer(0)
    with pytest.raises(ValueError):
        best_fit_layer(block_size(0) + 1)


def test_single_pages_exhaust_region():
    alloc = BuddyAllocator([MemEntry(2, 100)])
    addresses = [alloc.alloc(1) for _ in range(100)]
    assert len(set(addresses)) == 100
    assert all(2 * PAGE_SIZE <= a < 102 * PAGE_SIZE for a in addresses)
    assert alloc.alloc(1) is None
    for address in addresses:
        alloc.free(address)
    assert alloc.alloc(64) == 2 * PAGE_SIZE


def test_empty_allocator_has_nothing():
    assert BuddyAllocator([]).alloc(1) is None


def test_free_unknown_address_raises():
    alloc = BuddyAllocator([MemEntry(2, 100)])
    with pytest.raises(ValueError):
        alloc.free(5 * PAGE_SIZE)
    ptr = alloc.alloc(4)
    alloc.free(ptr)
    with pytest.raises(ValueError):
        alloc.free(ptr)


def test_overlapping_regions_rejected():
    with pytest.raises(ValueError):
        BuddyAllocator([MemEntry(0, 10), MemEntry(5, 10)])


def test_region_outside_address_space_rejected():
    with pytest.raises(ValueError):
        BuddyAllocator([MemEntry(block_size(0), 1)])


def test_two_regions_are_both_used():
    alloc = BuddyAllocator([MemEntry(0, 1), MemEntry(10, 1)])
    first = alloc.alloc(1)
    second = alloc.alloc(1)
    assert {first, second} == {0, 10 * PAGE_SIZE}
    assert alloc.alloc(1) is None