"""Tests for the deadline combinator."""
import asyncio

import pytest

from src.utils.deadline import with_deadline


class TestWithDeadline:
    @pytest.mark.asyncio
    async def test_returns_result_in_time(self):
        async def work():
            return 42

        assert await with_deadline(work(), 1.0, None) == 42

    @pytest.mark.asyncio
    async def test_timeout_returns_fallback(self):
        async def slow():
            await asyncio.sleep(5)
            return "late"

        assert await with_deadline(slow(), 0.01, "fallback", label="slow") == "fallback"

    @pytest.mark.asyncio
    async def test_exception_returns_fallback(self):
        async def broken():
            raise RuntimeError("boom")

        assert await with_deadline(broken(), 1.0, []) == []
