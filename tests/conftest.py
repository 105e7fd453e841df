"""Shared fixtures."""

import pytest

from taskpool import PIDAllocator, Strategy, TaskRegistry

from helpers import CAPACITY


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def allocator() -> PIDAllocator:
    return PIDAllocator()


@pytest.fixture
def block_registry(allocator) -> TaskRegistry:
    return TaskRegistry.with_strategy(Strategy.BLOCK, CAPACITY, allocator=allocator)


@pytest.fixture
def favor_new_registry(allocator) -> TaskRegistry:
    return TaskRegistry.with_strategy(Strategy.FAVOR_NEW, CAPACITY, allocator=allocator)


@pytest.fixture
def priority_registry(allocator) -> TaskRegistry:
    return TaskRegistry.with_strategy(Strategy.FAVOR_PRIORITY, CAPACITY, allocator=allocator)
