"""Tests for input parsing and user-facing messages."""

import pytest

from config import FIRST_FIT, FREE_COLOR, OCCUPIED_COLOR, QUICK_FIT
from engine import FirstFitAllocator, QuickFitAllocator
from utils import (
    describe_allocation,
    describe_deallocation,
    describe_reset,
    invalid_input_message,
    occupancy_color,
    parse_int,
    parse_positive_int,
)


class TestParsing:
    """User input parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("150", 150),
        ("  42 ", 42),
        ("+7", 7),
    ])
    def test_valid_positive(self, text, expected):
        assert parse_positive_int(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.5", "0", "-3", None])
    def test_invalid_positive(self, text):
        assert parse_positive_int(text) is None

    def test_parse_int_keeps_sign(self):
        """Identifiers are range-checked by the engine, not here."""
        assert parse_int("-1") == -1
        assert parse_int("0") == 0
        assert parse_int("x") is None


class TestColors:
    def test_color_follows_boolean(self):
        assert occupancy_color(True) == OCCUPIED_COLOR
        assert occupancy_color(False) == FREE_COLOR


class TestFirstFitMessages:
    """Messages shown in First-Fit mode."""

    def test_allocation_success(self):
        result = FirstFitAllocator().allocate(150)
        assert describe_allocation(result, FIRST_FIT) == "Process allocated to Block 1"

    def test_allocation_failure(self):
        result = FirstFitAllocator().allocate(600)
        assert describe_allocation(result, FIRST_FIT) == (
            "No suitable block found for process size 600 KB."
        )

    def test_invalid_size(self):
        result = FirstFitAllocator().allocate(0)
        assert describe_allocation(result, FIRST_FIT) == "Please enter a valid process size."

    def test_deallocation_messages(self):
        ff = FirstFitAllocator()
        ff.allocate(150)
        assert describe_deallocation(ff.deallocate(1), FIRST_FIT) == "Block 1 deallocated."
        assert describe_deallocation(ff.deallocate(1), FIRST_FIT) == "Block 1 is already free."
        assert describe_deallocation(ff.deallocate(9), FIRST_FIT) == "Invalid block number."

    def test_reset_message(self):
        assert describe_reset(FIRST_FIT) == "All memory blocks have been reset."


class TestQuickFitMessages:
    """Messages shown in Quick-Fit mode."""

    def test_allocation_success(self):
        result = QuickFitAllocator().allocate(120)
        assert describe_allocation(result, QUICK_FIT) == (
            "Process of size 120 KB allocated in block size 200 KB."
        )

    def test_allocation_failure(self):
        result = QuickFitAllocator().allocate(600)
        assert describe_allocation(result, QUICK_FIT) == (
            "No suitable block found for process size 600 KB."
        )

    def test_deallocation_messages(self):
        qf = QuickFitAllocator(strict=True)
        qf.allocate(120)
        assert describe_deallocation(qf.deallocate(200), QUICK_FIT) == (
            "Block of size 200 KB deallocated."
        )
        assert describe_deallocation(qf.deallocate(120), QUICK_FIT) == "Invalid block size."
        assert describe_deallocation(qf.deallocate(200), QUICK_FIT) == (
            "No block of size 200 KB is currently allocated."
        )

    def test_reset_message(self):
        assert describe_reset(QUICK_FIT) == "Memory has been reset."

    def test_invalid_input_message(self):
        assert invalid_input_message("block size") == "Please enter a valid block size."
