"""Shared pytest fixtures."""

import pytest

from taskcal.config import Config
from taskcal.core.core import Core
from taskcal.core.modules.task.models import Task
from taskcal.core.modules.user.models import User


@pytest.fixture
def config(tmp_path):
    """Config writing its JSON files under a temporary directory."""
    return Config(
        _env_file=None,
        token_secret_key="test-secret-key",
        data_path=str(tmp_path / "data"),
        bcrypt_rounds=4,  # bcrypt minimum, keeps tests fast
    )


@pytest.fixture
def core(config):
    return Core(config)


@pytest.fixture
async def users(core):
    """Register alice and bob, return their stored records."""
    alice = await core.services.user.create_user("alice", "pw1")
    bob = await core.services.user.create_user("bob", "pw2")
    return alice, bob


@pytest.fixture
def mock_user():
    """Create a mock user for testing."""
    return User(username="testuser", password_hash="$2b$04$hashed_password_here")


@pytest.fixture
def mock_task(mock_user):
    """Create a mock task owned by mock_user."""
    return Task(
        id="1714550400000",
        name="Homework",
        description="Exercises 1-10",
        subject="Math",
        date="2024-05-01",
        time="10:30",
        status="pendiente",
        owner=mock_user.username,
    )
