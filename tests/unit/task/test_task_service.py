"""Tests for ownership-scoped task CRUD."""

import asyncio
import datetime as dt
import json

import pytest

from taskcal.core.modules.task.models import TaskDraft, TaskFilter, TaskPatch
from taskcal.errors import ForbiddenError, TaskNotFoundError, ValidationError


def draft(**overrides) -> TaskDraft:
    data = {"name": "Homework", "date": "2024-05-01", "status": "pendiente"}
    data.update(overrides)
    return TaskDraft.model_validate(data)


class TestCreateTask:
    """Tests for task creation."""

    async def test_owner_taken_from_acting_user(self, core, users):
        """Test that the owner is the acting user even if the payload names someone else."""
        alice, _ = users
        task = await core.services.task.create_task(alice, draft(owner="bob"))

        assert task.owner == "alice"
        assert task.id
        assert task.date == dt.date(2024, 5, 1)

    async def test_unreadable_legacy_records_survive(self, core, users, config):
        """Test that creating a task keeps stored records that no longer validate."""
        alice, _ = users
        legacy = [
            {"id": "1", "name": "Orphan", "date": "2024-05-01", "owner": None},
            {"id": "2", "name": "Undated", "date": "", "owner": "bob"},
        ]
        config.tasks_path.parent.mkdir(parents=True, exist_ok=True)
        config.tasks_path.write_text(json.dumps(legacy), encoding="utf-8")

        await core.services.task.create_task(alice, draft(id="3"))

        stored = json.loads(config.tasks_path.read_text(encoding="utf-8"))
        assert [record["id"] for record in stored] == ["3", "1", "2"]
        assert stored[1:] == legacy

    async def test_client_id_kept(self, core, users):
        alice, _ = users
        task = await core.services.task.create_task(alice, draft(id="1714550400000"))
        assert task.id == "1714550400000"

    async def test_duplicate_client_id_rejected(self, core, users, config):
        """Test that reusing an existing id fails without writing."""
        alice, bob = users
        await core.services.task.create_task(alice, draft(id="42"))
        before = config.tasks_path.read_bytes()

        with pytest.raises(ValidationError, match="already exists"):
            await core.services.task.create_task(bob, draft(id="42"))
        assert config.tasks_path.read_bytes() == before

    async def test_concurrent_creates_get_unique_ids(self, core, users):
        """Test that server-assigned ids never collide, even within the same millisecond."""
        alice, _ = users
        tasks = await asyncio.gather(*(core.services.task.create_task(alice, draft(name=f"t{i}")) for i in range(10)))

        assert len({task.id for task in tasks}) == 10
        assert len(await core.services.task.list_tasks(alice)) == 10


class TestListTasks:
    """Tests for listing and filtering."""

    @pytest.fixture
    async def seeded(self, core, users):
        alice, bob = users
        service = core.services.task
        await service.create_task(alice, draft(id="1", name="Homework", subject="Math", date="2024-05-01"))
        await service.create_task(alice, draft(id="2", name="Essay", subject="History", date="2024-05-20"))
        await service.create_task(
            alice, draft(id="3", name="Lab report", subject="Chemistry", date="2024-06-02", status="completado")
        )
        await service.create_task(bob, draft(id="4", name="Bob's homework", date="2024-05-01"))
        return alice, bob

    async def test_only_own_tasks(self, core, seeded):
        """Test that tasks of other users are never listed."""
        alice, bob = seeded
        assert [t.id for t in await core.services.task.list_tasks(alice)] == ["1", "2", "3"]
        assert [t.id for t in await core.services.task.list_tasks(bob)] == ["4"]

    async def test_text_search_matches_name_and_subject(self, core, seeded):
        alice, _ = seeded
        by_name = await core.services.task.list_tasks(alice, TaskFilter(q="HOME"))
        by_subject = await core.services.task.list_tasks(alice, TaskFilter(q="hist"))
        assert [t.id for t in by_name] == ["1"]
        assert [t.id for t in by_subject] == ["2"]

    async def test_status_filter(self, core, seeded):
        alice, _ = seeded
        tasks = await core.services.task.list_tasks(alice, TaskFilter(status="completado"))
        assert [t.id for t in tasks] == ["3"]

    async def test_month_filter(self, core, seeded):
        alice, _ = seeded
        tasks = await core.services.task.list_tasks(alice, TaskFilter(month="2024-05"))
        assert [t.id for t in tasks] == ["1", "2"]

    async def test_date_filter_combined_with_text(self, core, seeded):
        alice, _ = seeded
        tasks = await core.services.task.list_tasks(alice, TaskFilter(date=dt.date(2024, 5, 1), q="essay"))
        assert tasks == []


class TestGetTask:
    async def test_owner_can_read(self, core, users):
        alice, _ = users
        created = await core.services.task.create_task(alice, draft(id="7"))
        assert await core.services.task.get_task(alice, "7") == created

    async def test_other_user_forbidden(self, core, users):
        alice, bob = users
        await core.services.task.create_task(alice, draft(id="7"))
        with pytest.raises(ForbiddenError):
            await core.services.task.get_task(bob, "7")

    async def test_missing(self, core, users):
        alice, _ = users
        with pytest.raises(TaskNotFoundError):
            await core.services.task.get_task(alice, "nope")


class TestUpdateTask:
    """Tests for partial updates."""

    async def test_patch_merges_fields(self, core, users):
        """Test that only provided fields change."""
        alice, _ = users
        await core.services.task.create_task(alice, draft(id="7", subject="Math", time="09:00"))

        updated = await core.services.task.update_task(alice, "7", TaskPatch(status="completado", time=None))

        assert updated.status == "completado"
        assert updated.time is None
        assert updated.subject == "Math"
        assert updated.name == "Homework"
        assert (await core.services.task.get_task(alice, "7")) == updated

    async def test_id_and_owner_not_patchable(self, core, users):
        """Test that id and owner sent in the body are ignored."""
        alice, _ = users
        await core.services.task.create_task(alice, draft(id="7"))

        patch = TaskPatch.model_validate({"id": "8", "owner": "bob", "name": "Renamed"})
        updated = await core.services.task.update_task(alice, "7", patch)

        assert (updated.id, updated.owner, updated.name) == ("7", "alice", "Renamed")

    async def test_non_owner_forbidden_and_store_unchanged(self, core, users, config):
        alice, bob = users
        await core.services.task.create_task(alice, draft(id="7"))
        before = config.tasks_path.read_bytes()

        with pytest.raises(ForbiddenError, match="No autorizado"):
            await core.services.task.update_task(bob, "7", TaskPatch(name="Hijacked"))
        assert config.tasks_path.read_bytes() == before

    async def test_missing(self, core, users):
        alice, _ = users
        with pytest.raises(TaskNotFoundError, match="No encontrada"):
            await core.services.task.update_task(alice, "nope", TaskPatch(name="x"))


class TestDeleteTask:
    """Tests for deletion."""

    async def test_owner_deletes(self, core, users):
        alice, _ = users
        await core.services.task.create_task(alice, draft(id="7"))
        await core.services.task.create_task(alice, draft(id="8"))

        await core.services.task.delete_task(alice, "7")

        assert [t.id for t in await core.services.task.list_tasks(alice)] == ["8"]

    async def test_non_owner_forbidden_and_store_unchanged(self, core, users, config):
        alice, bob = users
        await core.services.task.create_task(alice, draft(id="7"))
        before = config.tasks_path.read_bytes()

        with pytest.raises(ForbiddenError):
            await core.services.task.delete_task(bob, "7")
        assert config.tasks_path.read_bytes() == before

    async def test_missing(self, core, users):
        alice, _ = users
        with pytest.raises(TaskNotFoundError):
            await core.services.task.delete_task(alice, "nope")
