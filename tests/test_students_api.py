"""
Tests for the students API client wire format
"""

import json

import httpx
import pytest

from app.schemas.student import StudentForm
from app.services.students_api import StudentsAPI, StudentsAPIError

BASE_URL = "http://backend.test/server.php?module=students"


def make_api(handler) -> StudentsAPI:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StudentsAPI(client, base_url=BASE_URL)


class Recorder:
    """Transport handler that remembers requests and answers with a fixed response."""

    def __init__(self, status_code: int = 200, payload=None):
        self.status_code = status_code
        self.payload = payload
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.payload is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.mark.asyncio
async def test_fetch_paginated_sends_page_and_limit():
    recorder = Recorder(payload={
        "students": [{"id": 1, "fullname": "Ana", "email": "ana@example.com", "age": 20}],
        "total": 11,
    })
    api = make_api(recorder)

    page = await api.fetch_paginated(2, 5)

    assert recorder.last.method == "GET"
    assert str(recorder.last.url) == "http://backend.test/server.php?module=students&page=2&limit=5"
    assert recorder.last.url.params["module"] == "students"
    assert recorder.last.url.params["page"] == "2"
    assert recorder.last.url.params["limit"] == "5"
    assert page.total == 11
    assert page.students[0].id == "1"
    assert page.students[0].fullname == "Ana"


@pytest.mark.asyncio
async def test_fetch_all():
    recorder = Recorder(payload=[
        {"id": 1, "fullname": "Ana", "email": "ana@example.com", "age": 20},
        {"id": 2, "fullname": "Bo", "email": "bo@example.com", "age": 22},
    ])
    api = make_api(recorder)

    students = await api.fetch_all()

    assert [s.id for s in students] == ["1", "2"]
    assert recorder.last.url.params["module"] == "students"
    assert "page" not in recorder.last.url.params


@pytest.mark.asyncio
async def test_row_without_age_is_accepted():
    recorder = Recorder(payload={
        "students": [{"id": 3, "fullname": "Cy", "email": "cy@example.com", "age": None}],
        "total": 1,
    })
    api = make_api(recorder)

    page = await api.fetch_paginated(1, 5)

    assert page.students[0].age is None


@pytest.mark.asyncio
async def test_create_posts_record_without_id():
    recorder = Recorder(payload={"message": "Student created"})
    api = make_api(recorder)

    await api.create(StudentForm(fullname="Ana", email="ana@example.com", age="20"))

    assert recorder.last.method == "POST"
    assert recorder.last_json() == {"fullname": "Ana", "email": "ana@example.com", "age": 20}


@pytest.mark.asyncio
async def test_update_puts_record_with_id():
    recorder = Recorder(payload={"message": "Student updated"})
    api = make_api(recorder)

    await api.update(StudentForm(id="4", fullname="Ana", email="ana@example.com", age="20"))

    assert recorder.last.method == "PUT"
    assert recorder.last_json() == {"id": "4", "fullname": "Ana", "email": "ana@example.com", "age": 20}


@pytest.mark.asyncio
async def test_remove_sends_id_in_body():
    recorder = Recorder()
    api = make_api(recorder)

    result = await api.remove("4")

    assert result is None
    assert recorder.last.method == "DELETE"
    assert recorder.last_json() == {"id": "4"}


@pytest.mark.asyncio
async def test_error_status_carries_backend_message():
    api = make_api(Recorder(status_code=400, payload={"error": "Email already exists"}))

    with pytest.raises(StudentsAPIError) as exc_info:
        await api.create(StudentForm(fullname="Ana", email="ana@example.com", age="20"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Email already exists"


@pytest.mark.asyncio
async def test_error_status_without_body():
    api = make_api(Recorder(status_code=500))

    with pytest.raises(StudentsAPIError) as exc_info:
        await api.fetch_paginated(1, 5)

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_transport_error_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = make_api(handler)

    with pytest.raises(StudentsAPIError) as exc_info:
        await api.fetch_paginated(1, 5)

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_unexpected_page_payload():
    api = make_api(Recorder(payload={"rows": []}))

    with pytest.raises(StudentsAPIError):
        await api.fetch_paginated(1, 5)


@pytest.mark.asyncio
async def test_invalid_json():
    api = make_api(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(StudentsAPIError):
        await api.fetch_all()
