# engine.py

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from config import (
    DEFAULT_BLOCK_CAPACITIES,
    DEFAULT_CLASS_POPULATION,
    DEFAULT_SIZE_CLASSES,
)


class AllocError:
    INVALID_REQUEST_SIZE = "InvalidRequestSize"
    NO_SUITABLE_BLOCK = "NoSuitableBlock"


class DeallocError:
    INVALID_BLOCK_INDEX = "InvalidBlockIndex"
    ALREADY_FREE = "AlreadyFree"
    UNKNOWN_BLOCK_SIZE = "UnknownBlockSize"
    NO_OUTSTANDING_BLOCK = "NoOutstandingBlock"


@dataclass
class AllocationResult:
    """
    Outcome of an allocate() call.

    On success `block_index` (First-Fit, 1-based) and/or `block_size` name
    where the request landed. On failure `error` holds an AllocError value
    and the engine state is untouched.
    """
    ok: bool
    request_size: object
    error: Optional[str] = None
    block_index: Optional[int] = None
    block_size: Optional[int] = None

    def __bool__(self):
        return self.ok


@dataclass
class DeallocationResult:
    """Outcome of a deallocate() call; `released` is the KB given back."""
    ok: bool
    identifier: object
    error: Optional[str] = None
    released: int = 0

    def __bool__(self):
        return self.ok


@dataclass
class BlockRow:
    index: int
    capacity: int
    allocated: int
    free: int
    occupied: bool


@dataclass
class SizeClassRow:
    capacity: int
    free_count: int


def _is_int(value):
    # bool is an int subclass but never a valid size or identifier
    return isinstance(value, int) and not isinstance(value, bool)


class Block:
    def __init__(self, capacity):
        self.capacity = capacity
        self.allocated = 0

    @property
    def occupied(self):
        return self.allocated > 0

    @property
    def free(self):
        return self.capacity - self.allocated

    def __repr__(self):
        state = "A" if self.occupied else "F"
        return f"[{state}|{self.allocated}/{self.capacity}]"


# -----------------------------
# First-Fit
# -----------------------------
class FirstFitAllocator:
    """
    First-Fit over a fixed, ordered list of blocks.

    Blocks are never split or merged: a process occupies a whole block and
    the unused tail of that block stays wasted until the block is freed.
    """

    def __init__(self, capacities: Sequence[int] = DEFAULT_BLOCK_CAPACITIES):
        capacities = list(capacities)
        if not capacities:
            raise ValueError("At least one block is required")
        for cap in capacities:
            if not _is_int(cap) or cap <= 0:
                raise ValueError(f"Invalid block capacity: {cap!r}")

        self.capacities = capacities
        self.blocks: List[Block] = [Block(cap) for cap in capacities]
        self.event_log: List[str] = []
        self._lock = threading.RLock()

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    def allocate(self, request_size) -> AllocationResult:
        if not _is_int(request_size) or request_size <= 0:
            self.event_log.append(f"Rejected: invalid request size {request_size!r}")
            return AllocationResult(False, request_size, AllocError.INVALID_REQUEST_SIZE)

        with self._lock:
            for i, block in enumerate(self.blocks):
                if not block.occupied and block.capacity >= request_size:
                    block.allocated = request_size
                    self.event_log.append(
                        f"Allocated: {request_size}KB -> Block {i + 1} ({block.capacity}KB)"
                    )
                    return AllocationResult(
                        True, request_size, block_index=i + 1, block_size=block.capacity
                    )

        self.event_log.append(f"Failed: no suitable block for {request_size}KB")
        return AllocationResult(False, request_size, AllocError.NO_SUITABLE_BLOCK)

    def deallocate(self, block_index) -> DeallocationResult:
        if not _is_int(block_index) or not 1 <= block_index <= self.block_count:
            self.event_log.append(f"Rejected: invalid block number {block_index!r}")
            return DeallocationResult(False, block_index, DeallocError.INVALID_BLOCK_INDEX)

        with self._lock:
            block = self.blocks[block_index - 1]
            if not block.occupied:
                self.event_log.append(f"Failed: Block {block_index} is already free")
                return DeallocationResult(False, block_index, DeallocError.ALREADY_FREE)

            released = block.allocated
            block.allocated = 0

        self.event_log.append(f"Freed: Block {block_index} ({released}KB released)")
        return DeallocationResult(True, block_index, released=released)

    def reset(self):
        with self._lock:
            for block in self.blocks:
                block.allocated = 0
        self.event_log.append("Reset: all blocks free")

    def snapshot(self) -> List[BlockRow]:
        with self._lock:
            return [
                BlockRow(i + 1, b.capacity, b.allocated, b.free, b.occupied)
                for i, b in enumerate(self.blocks)
            ]

    # --------------------------------------
    # Fragmentation Metrics
    # --------------------------------------
    def stats(self) -> Dict[str, float]:
        rows = self.snapshot()

        total = sum(r.capacity for r in rows)
        allocated = sum(r.allocated for r in rows)
        occupied_capacity = sum(r.capacity for r in rows if r.occupied)
        free_blocks = [r.capacity for r in rows if not r.occupied]
        total_free = sum(free_blocks)

        # Internal: space inside occupied blocks the resident process does not use
        internal = (occupied_capacity - allocated) / occupied_capacity if occupied_capacity else 0
        # External: free space outside the single largest free block
        external = 1 - (max(free_blocks) / total_free) if total_free else 0
        utilization = allocated / total

        return {
            "total": total,
            "allocated": allocated,
            "free": total - allocated,
            "internal": round(internal, 4),
            "external": round(external, 4),
            "utilization": round(utilization, 4),
        }


# -----------------------------
# Quick-Fit
# -----------------------------
class QuickFitAllocator:
    """
    Quick-Fit over a fixed set of size classes, each with its own free list.

    Only free-list bookkeeping is modelled: a token is interchangeable with
    any other token of its class, so each free list reduces to a count.

    With ``strict=False`` (the default) deallocate() returns a token to its
    class even if none was handed out, so a class can grow past its initial
    population. ``strict=True`` rejects such calls with NoOutstandingBlock.
    """

    def __init__(
        self,
        size_classes: Sequence[int] = DEFAULT_SIZE_CLASSES,
        population: int = DEFAULT_CLASS_POPULATION,
        strict: bool = False,
    ):
        size_classes = sorted(size_classes)
        if not size_classes:
            raise ValueError("At least one size class is required")
        if len(set(size_classes)) != len(size_classes):
            raise ValueError("Size classes must be unique")
        for cap in size_classes:
            if not _is_int(cap) or cap <= 0:
                raise ValueError(f"Invalid size class: {cap!r}")
        if not _is_int(population) or population < 0:
            raise ValueError(f"Invalid class population: {population!r}")

        self.size_classes = size_classes
        self.population = population
        self.strict = strict
        self.event_log: List[str] = []
        self._lock = threading.RLock()
        self._fill()

    def _fill(self):
        self.free_lists: Dict[int, int] = {cap: self.population for cap in self.size_classes}
        self.outstanding: Dict[int, int] = {cap: 0 for cap in self.size_classes}

    def allocate(self, request_size) -> AllocationResult:
        if not _is_int(request_size) or request_size <= 0:
            self.event_log.append(f"Rejected: invalid request size {request_size!r}")
            return AllocationResult(False, request_size, AllocError.INVALID_REQUEST_SIZE)

        with self._lock:
            for cap in self.size_classes:
                if cap >= request_size and self.free_lists[cap] > 0:
                    self.free_lists[cap] -= 1
                    self.outstanding[cap] += 1
                    self.event_log.append(f"Allocated: {request_size}KB -> {cap}KB class")
                    return AllocationResult(True, request_size, block_size=cap)

        self.event_log.append(f"Failed: no suitable block for {request_size}KB")
        return AllocationResult(False, request_size, AllocError.NO_SUITABLE_BLOCK)

    def deallocate(self, block_size) -> DeallocationResult:
        if not _is_int(block_size) or block_size not in self.free_lists:
            self.event_log.append(f"Rejected: unknown block size {block_size!r}")
            return DeallocationResult(False, block_size, DeallocError.UNKNOWN_BLOCK_SIZE)

        with self._lock:
            if self.outstanding[block_size] == 0:
                if self.strict:
                    self.event_log.append(f"Failed: no {block_size}KB block is allocated")
                    return DeallocationResult(False, block_size, DeallocError.NO_OUTSTANDING_BLOCK)
            else:
                self.outstanding[block_size] -= 1
            self.free_lists[block_size] += 1

        self.event_log.append(f"Freed: {block_size}KB block returned to its free list")
        return DeallocationResult(True, block_size, released=block_size)

    def reset(self):
        with self._lock:
            self._fill()
        self.event_log.append(f"Reset: {self.population} free blocks per class")

    def snapshot(self) -> List[SizeClassRow]:
        with self._lock:
            return [SizeClassRow(cap, self.free_lists[cap]) for cap in self.size_classes]

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "free_tokens": sum(self.free_lists.values()),
                "free_kb": sum(cap * n for cap, n in self.free_lists.items()),
                "outstanding_tokens": sum(self.outstanding.values()),
                "outstanding_kb": sum(cap * n for cap, n in self.outstanding.items()),
            }
