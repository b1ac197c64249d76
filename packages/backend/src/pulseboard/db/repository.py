"""Repositories — the only code that talks to the database.

Learn: Each method opens its own short-lived session from the factory.
The broadcaster reads statistics outside of any HTTP request (e.g. when a
WebSocket connects), so repositories can't depend on a per-request session.

Errors from SQLAlchemy are not caught here. Callers see them as-is.
"""

import uuid
from typing import Optional

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pulseboard.db.models import Project, Task, User


class WorkspaceRepository:
    """Projects and tasks over durable storage."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # ─── Projects ───────────────────────────────────────

    async def list_projects(self) -> list[Project]:
        async with self.session_factory() as db:
            result = await db.execute(select(Project).order_by(Project.created_at))
            return list(result.scalars().all())

    async def get_project(self, project_id: uuid.UUID) -> Optional[Project]:
        async with self.session_factory() as db:
            return await db.get(Project, project_id)

    async def create_project(
        self,
        title: str,
        description: Optional[str] = None,
    ) -> Project:
        async with self.session_factory() as db:
            project = Project(title=title, description=description, progress=0)
            db.add(project)
            await db.commit()
            return project

    # ─── Tasks ──────────────────────────────────────────

    async def list_tasks(
        self, project_id: Optional[uuid.UUID] = None
    ) -> list[Task]:
        query = select(Task).order_by(Task.created_at)
        if project_id is not None:
            query = query.where(Task.project_id == project_id)
        async with self.session_factory() as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def create_task(
        self,
        title: str,
        project_id: Optional[uuid.UUID] = None,
    ) -> Task:
        async with self.session_factory() as db:
            task = Task(title=title, project_id=project_id, completed=False)
            db.add(task)
            await db.commit()
            return task

    async def toggle_task_completion(self, task_id: uuid.UUID) -> Optional[Task]:
        """Flip a task's completed flag. Returns None if the task doesn't exist."""
        async with self.session_factory() as db:
            task = await db.get(Task, task_id)
            if task is None:
                return None
            task.completed = not task.completed
            await db.commit()
            return task

    async def ping(self) -> None:
        async with self.session_factory() as db:
            await db.execute(text("SELECT 1"))


class UserRepository:
    """Accounts used by the session gate."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self.session_factory() as db:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalars().first()

    async def create(self, email: str, name: str, password_hash: str) -> User:
        async with self.session_factory() as db:
            user = User(email=email, name=name, password_hash=password_hash)
            db.add(user)
            await db.commit()
            return user
