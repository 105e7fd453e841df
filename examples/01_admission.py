"""
Admission Example

Fills a FavorPriority registry past capacity from several concurrent tasks and
prints the survivors in each ordering.

Run:
  uv run python examples/01_admission.py
"""

from __future__ import annotations

import logging
import random

import anyio

from taskpool import AsyncTaskRegistry, Priority, SortCriteria, SortOrder, Strategy


async def submit(registry: AsyncTaskRegistry, priority: Priority) -> None:
    task = await registry.add(priority)
    if task is None:
        print(f"rejected {priority.name}")
    else:
        print(f"admitted {task.pid} at {priority.name}")


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")
    registry = AsyncTaskRegistry.create(5, strategy=Strategy.FAVOR_PRIORITY)

    async with anyio.create_task_group() as tg:
        for _ in range(12):
            tg.start_soon(submit, registry, random.choice(list(Priority)))

    for criterion in SortCriteria:
        for order in SortOrder:
            tasks = await registry.tasks(criterion, order)
            listing = ", ".join(f"{t.pid.value}:{t.priority.name}" for t in tasks)
            print(f"{criterion.name:<10} {order.name:<10} [{listing}]")

    await registry.kill_all()


if __name__ == "__main__":
    anyio.run(main)
