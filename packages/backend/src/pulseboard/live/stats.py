"""Workspace statistics snapshot.

Learn: The snapshot is always rebuilt from the full project and task
collections. Nothing is cached or patched incrementally, so a snapshot
can never drift from the data it describes. That costs one extra read
per broadcast, which is fine for a small workspace.
"""

import math
from typing import Iterable, Optional, Protocol

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProjectSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    progress: int = 0


class StatsSnapshot(BaseModel):
    """Aggregate view of the workspace, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_projects: int
    total_tasks: int
    overall_completion: int
    projects: list[ProjectSummary]

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class StatsSource(Protocol):
    """The slice of the workspace repository the aggregator reads."""

    async def list_projects(self) -> list: ...

    async def list_tasks(self) -> list: ...


def completion_percentage(completed: int, total: int) -> int:
    """Completed share as a whole percentage; halves round up. 0 when empty."""
    if total == 0:
        return 0
    return math.floor((completed / total) * 100 + 0.5)


def summarize(projects: Iterable, tasks: Iterable) -> StatsSnapshot:
    projects = list(projects)
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.completed)
    return StatsSnapshot(
        total_projects=len(projects),
        total_tasks=len(tasks),
        overall_completion=completion_percentage(completed, len(tasks)),
        projects=[
            ProjectSummary(
                id=str(p.id),
                name=p.title,
                description=p.description,
                progress=p.progress or 0,
            )
            for p in projects
        ],
    )


async def compute_stats(repository: StatsSource) -> StatsSnapshot:
    """Read the whole workspace and summarize it.

    Repository failures propagate to the caller unchanged.
    """
    projects = await repository.list_projects()
    tasks = await repository.list_tasks()
    return summarize(projects, tasks)
