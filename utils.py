# utils.py

from typing import Optional

from config import FIRST_FIT, FREE_COLOR, OCCUPIED_COLOR
from engine import AllocError, AllocationResult, DeallocError, DeallocationResult


def occupancy_color(occupied: bool) -> str:
    """Return the highlight color for an occupied/free cell."""
    return OCCUPIED_COLOR if occupied else FREE_COLOR


# -----------------------------
# Input parsing
# -----------------------------
def parse_int(text) -> Optional[int]:
    """Parse a decimal integer typed by the user, or None if it is not one."""
    if text is None:
        return None
    text = str(text).strip()
    try:
        return int(text)
    except ValueError:
        return None


def parse_positive_int(text) -> Optional[int]:
    value = parse_int(text)
    if value is None or value <= 0:
        return None
    return value


def invalid_input_message(field: str) -> str:
    return f"Please enter a valid {field}."


# -----------------------------
# Outcome -> message
# -----------------------------
def describe_allocation(result: AllocationResult, mode: str) -> str:
    if result.ok:
        if mode == FIRST_FIT:
            return f"Process allocated to Block {result.block_index}"
        return (
            f"Process of size {result.request_size} KB allocated in "
            f"block size {result.block_size} KB."
        )
    if result.error == AllocError.INVALID_REQUEST_SIZE:
        return invalid_input_message("process size")
    return f"No suitable block found for process size {result.request_size} KB."


def describe_deallocation(result: DeallocationResult, mode: str) -> str:
    if mode == FIRST_FIT:
        if result.ok:
            return f"Block {result.identifier} deallocated."
        if result.error == DeallocError.ALREADY_FREE:
            return f"Block {result.identifier} is already free."
        return "Invalid block number."

    if result.ok:
        return f"Block of size {result.identifier} KB deallocated."
    if result.error == DeallocError.NO_OUTSTANDING_BLOCK:
        return f"No block of size {result.identifier} KB is currently allocated."
    return "Invalid block size."


def describe_reset(mode: str) -> str:
    if mode == FIRST_FIT:
        return "All memory blocks have been reset."
    return "Memory has been reset."
