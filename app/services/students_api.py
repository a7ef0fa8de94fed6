import httpx
from typing import List, Optional
from app.config import settings
from app.schemas.student import StudentForm, StudentPage, StudentResponse
import logging

logger = logging.getLogger(__name__)


class StudentsAPIError(Exception):
    """Network or API call to the students backend failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StudentsAPI:
    """Client for the remote students REST API"""

    def __init__(self, client: httpx.AsyncClient, base_url: Optional[str] = None):
        self.client = client
        self.base_url = base_url or settings.STUDENTS_API_URL

    async def _request(self, method: str, params: Optional[dict] = None, **kwargs):
        # Keep the query already in the base URL (e.g. ?module=students)
        url = httpx.URL(self.base_url)
        if params:
            url = url.copy_merge_params(params)
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise StudentsAPIError(f"{method} {self.base_url} failed: {e}") from e

        if response.status_code >= 400:
            raise StudentsAPIError(
                _error_message(response) or f"{method} failed with status {response.status_code}",
                status_code=response.status_code
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise StudentsAPIError(f"Invalid JSON from students API: {e}") from e

    async def fetch_paginated(self, page: int, page_size: int) -> StudentPage:
        """Get one page of students and the total record count"""
        data = await self._request("GET", params={"page": page, "limit": page_size})
        logger.debug(f"Fetched page {page} (size {page_size}): {data}")
        try:
            return StudentPage(**data)
        except (TypeError, ValueError) as e:
            raise StudentsAPIError(f"Unexpected page payload: {e}") from e

    async def fetch_all(self) -> List[StudentResponse]:
        """Get every student, unpaginated"""
        data = await self._request("GET")
        try:
            return [StudentResponse(**item) for item in data]
        except (TypeError, ValueError) as e:
            raise StudentsAPIError(f"Unexpected list payload: {e}") from e

    async def create(self, student: StudentForm):
        logger.info(f"Creating student {student.email}")
        return await self._request("POST", json=student.create_payload())

    async def update(self, student: StudentForm):
        logger.info(f"Updating student {student.id}")
        return await self._request("PUT", json=student.update_payload())

    async def remove(self, student_id: str):
        logger.info(f"Deleting student {student_id}")
        return await self._request("DELETE", json={"id": student_id})


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("error") or data.get("message")
    return None


# Shared HTTP client, opened and closed by the app lifespan
_client: Optional[httpx.AsyncClient] = None


async def init_client():
    """
    Open the shared HTTP client for the students API
    """
    global _client
    _client = httpx.AsyncClient(timeout=settings.STUDENTS_API_TIMEOUT)
    logger.info(f"Students API client ready for {settings.STUDENTS_API_URL}")


async def close_client():
    """
    Close the shared HTTP client
    """
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
    logger.info("Students API client closed")


async def get_students_api():
    """
    Dependency for getting the students API client
    """
    if _client is None:
        # Outside the lifespan (scripts, ad-hoc use): one client per request
        async with httpx.AsyncClient(timeout=settings.STUDENTS_API_TIMEOUT) as client:
            yield StudentsAPI(client)
        return
    yield StudentsAPI(_client)
