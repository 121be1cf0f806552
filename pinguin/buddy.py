"""Buddy page allocator over a 32-bit address space."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

PAGE_SIZE = 4096
POINTER_MAX = 0xFFFFFFFF
BUDDY_LAYERS = 21
BUDDY_PAGES_COUNT = POINTER_MAX // PAGE_SIZE
BUDDY_MAX_BLOCK_SIZE = BUDDY_PAGES_COUNT
TOTAL_PAGES = (POINTER_MAX + 1) // PAGE_SIZE


class _Region(Protocol):
    base: int
    length: int


def block_size(layer: int) -> int:
    """Number of pages in a block of ``layer``; layer 0 spans the whole address space."""
    if not 0 <= layer < BUDDY_LAYERS:
        raise ValueError(f"layer must lie in 0..{BUDDY_LAYERS - 1}, got {layer}")
    return (BUDDY_MAX_BLOCK_SIZE >> layer) + 1


def best_fit_layer(pages: int) -> int:
    """Layer of the smallest block holding ``pages`` pages."""
    if pages <= 0:
        raise ValueError("page count must be positive")
    if pages > block_size(0):
        raise ValueError(f"no block holds {pages} pages")
    return next(
        layer for layer in reversed(range(BUDDY_LAYERS)) if block_size(layer) >= pages
    )


@dataclass(frozen=True)
class _Block:
    region: int
    layer: int


class BuddyAllocator:
    """Allocates power-of-two runs of pages out of free regions.

    Regions are given in pages (``base`` and ``length``); addresses handed out
    and taken back are byte addresses. Each region is split into buddy blocks
    aligned relative to its own base, and among adequate free blocks the one at
    the lowest address is used.
    """

    def __init__(self, free_regions: Iterable[_Region]) -> None:
        self._free: dict[int, _Block] = {}
        self._used: dict[int, _Block] = {}

        spans = []
        for region in free_regions:
            start, length = region.base, region.length
            if start < 0 or length < 0 or start + length > TOTAL_PAGES:
                raise ValueError(f"region {start}+{length} lies outside the address space")
            if length:
                spans.append((start, start + length))
        spans.sort()
        for (_, end), (next_start, _) in zip(spans, spans[1:]):
            if next_start < end:
                raise ValueError("free regions overlap")
        for start, end in spans:
            self._add_region(start, end - start)

    def _add_region(self, start: int, length: int) -> None:
        page = start
        for layer in range(BUDDY_LAYERS):
            size = block_size(layer)
            if length >= size:
                self._free[page] = _Block(start, layer)
                page += size
                length -= size

    def alloc(self, pages: int) -> int | None:
        """Return the byte address of a block of at least ``pages`` pages, or None."""
        target = best_fit_layer(pages)
        needed = block_size(target)
        page = next(
            (p for p in sorted(self._free) if block_size(self._free[p].layer) >= needed),
            None,
        )
        if page is None:
            return None
        block = self._free.pop(page)
        layer = block.layer
        while layer < target:
            layer += 1
            self._free[page + block_size(layer)] = _Block(block.region, layer)
        self._used[page] = _Block(block.region, target)
        return page * PAGE_SIZE

    def free(self, address: int) -> None:
        """Give back a block returned by :meth:`alloc`, merging it with free buddies."""
        page, remainder = divmod(address, PAGE_SIZE)
        block = None if remainder else self._used.pop(page, None)
        if block is None:
            raise ValueError(f"{address:#x} is not an allocated block")
        layer = block.layer
        while layer > 0:
            size = block_size(layer)
            buddy = block.region + ((page - block.region) ^ size)
            if self._free.get(buddy) != _Block(block.region, layer):
                break
            del self._free[buddy]
            page = min(page, buddy)
            layer -= 1
        self._free[page] = _Block(block.region, layer)