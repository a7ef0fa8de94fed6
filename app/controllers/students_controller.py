from typing import List, Optional
from app.schemas.pagination import PageState, count_pages, resolve_page_size
from app.schemas.student import StudentForm, StudentPage, StudentResponse
from app.services.students_api import StudentsAPI, StudentsAPIError
import logging

logger = logging.getLogger(__name__)


class StudentsController:
    """
    Page controller for the students form and table.

    Holds the state of one page view (rows, form values, pagination) and
    maps each user action to calls on the students API. Every failure is
    logged and leaves the current view as it was. The web layer reloads
    the list after each successful action by redirecting to the page view.
    """

    def __init__(
        self,
        api: StudentsAPI,
        current_page: int = 1,
        page_size=None
    ):
        self.api = api
        self.state = PageState(
            current_page=max(current_page, 1),
            page_size=resolve_page_size(page_size)
        )
        self.students: List[StudentResponse] = []
        self.form = StudentForm()
        self.page_info = ""

    @property
    def current_page(self) -> int:
        return self.state.current_page

    @property
    def total_pages(self) -> int:
        return self.state.total_pages

    @property
    def page_size(self) -> int:
        return self.state.page_size

    async def _fetch(self, page: int) -> Optional[StudentPage]:
        try:
            return await self.api.fetch_paginated(page, self.page_size)
        except StudentsAPIError as e:
            logger.error(f"Error loading students: {e.message}")
            return None

    async def load_students(self) -> bool:
        """
        Fetch the current page and render it.
        A page past the end is replaced by the last page, fetched again.
        """
        page = self.current_page
        data = await self._fetch(page)
        if data is None:
            return False

        total_pages = count_pages(data.total, self.page_size)
        last_page = max(total_pages, 1)
        if page > last_page:
            logger.info(f"Page {page} is past the last page, showing page {last_page}")
            page = last_page
            data = await self._fetch(page)
            if data is None:
                return False
            total_pages = count_pages(data.total, self.page_size)

        self.students = data.students
        self.state.current_page = page
        self.state.total_pages = total_pages
        self.page_info = self.state.info
        logger.debug(f"Loaded {len(self.students)} students, {self.page_info}")
        return True

    async def save(self, form: StudentForm) -> bool:
        """Submit handler: create (empty id) or update the record, then clear the form"""
        self.form = form
        try:
            if form.is_new:
                await self.api.create(form)
            else:
                await self.api.update(form)
        except StudentsAPIError as e:
            logger.error(f"Error saving student: {e.message}")
            return False

        self.clear_form()
        return True

    def clear_form(self):
        self.form = StudentForm()

    def cancel(self):
        """Drop the edited id so the next submit creates a new record"""
        self.form = self.form.model_copy(update={"id": ""})

    def fill_form(self, student: StudentResponse):
        self.form = StudentForm.from_student(student)

    def edit(self, student_id: str) -> bool:
        """Fill the form with a row of the loaded page"""
        for student in self.students:
            if student.id == student_id:
                self.fill_form(student)
                return True
        logger.warning(f"Student {student_id} is not on page {self.current_page}")
        return False

    async def delete(self, student_id: str, confirmed: bool) -> bool:
        """Remove a record by id; nothing happens without confirmation"""
        if not confirmed:
            return False
        try:
            await self.api.remove(student_id)
        except StudentsAPIError as e:
            logger.error(f"Error deleting student: {e.message}")
            return False
        return True
