"""Shared pytest fixtures."""

import logging

import pytest

from jobmatch.domain.models import Posting, Profile
from jobmatch.logging.context import clear_log_context


@pytest.fixture(autouse=True)
def clean_log_context():
    """Each test starts without leftover logging context."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Minimal valid environment for load_config()."""
    for name in ("LLM_BASE_URL", "LLM_MODEL", "LOG_LEVEL", "MATCH_THRESHOLD", "OPENAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LLM_API_KEY", "test-key")


@pytest.fixture
def sample_profile():
    return Profile.from_raw(
        {
            "skills": ["Python", "FastAPI", "PostgreSQL"],
            "desiredRoles": ["Backend Engineer"],
            "yearsOfExperience": 6,
            "seniorityLevel": "Senior",
            "currentRole": "Software Engineer",
            "experience": [
                {"title": "Software Engineer", "company": "Acme"},
                {"title": "Junior Developer", "company": "Initech"},
                {"title": "Intern", "company": "Globex"},
            ],
        }
    )


@pytest.fixture
def sample_postings():
    return [
        Posting(id="a", title="Backend Engineer", company="Acme", description="Python APIs"),
        Posting(id="b", title="Data Engineer", company="Globex", description="Spark pipelines"),
        Posting(id="c", title="Platform Engineer", company="Initech", description="Kubernetes"),
    ]
