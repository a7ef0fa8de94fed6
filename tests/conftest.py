"""
Pytest fixtures for the students page tests.
"""

import os

# Keep the log file out of the working tree
os.environ.setdefault("LOG_FILE", os.devnull)

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from app.schemas.student import StudentPage, StudentResponse
from app.services.students_api import StudentsAPI, get_students_api


def make_page(total: int = 12, count: int = 5, start: int = 1) -> StudentPage:
    """A page of fake students with ids start..start+count-1."""
    students = [
        StudentResponse(
            id=str(i),
            fullname=f"Student {i}",
            email=f"student{i}@example.com",
            age=18 + i
        )
        for i in range(start, start + count)
    ]
    return StudentPage(students=students, total=total)


@pytest.fixture
def fake_api():
    """Students API double; every call succeeds unless a test says otherwise."""
    api = AsyncMock(spec=StudentsAPI)
    api.fetch_paginated.return_value = make_page()
    return api


@pytest.fixture
def client(fake_api):
    """FastAPI test client with the students API replaced by fake_api."""
    from app.main import app

    app.dependency_overrides[get_students_api] = lambda: fake_api
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def page_factory():
    """make_page, for tests that need a different page shape."""
    return make_page
