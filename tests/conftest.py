"""Test configuration shared by all test packages."""
import os
import tempfile

# Settings are read at import time, so point them at throwaway values first
_db_dir = tempfile.mkdtemp(prefix="rbac-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret-key-used-only-by-the-test-suite"
os.environ["AUTH_RATE_LIMIT"] = "1000/minute"

import pytest  # noqa: E402

from app.features.permissions.roles import Role  # noqa: E402
from app.features.permissions.subject import Subject  # noqa: E402


@pytest.fixture
def admin():
    return Subject(id="a1", role=Role.ADMIN)


@pytest.fixture
def member():
    return Subject(id="u1", role=Role.MEMBER)


@pytest.fixture
def billing():
    return Subject(id="b1", role=Role.BILLING)
