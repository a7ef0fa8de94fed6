from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode
from app.config import settings
from app.controllers.students_controller import StudentsController
from app.schemas.pagination import PageState, resolve_page_size
from app.schemas.student import StudentForm
from app.services.students_api import StudentsAPI, get_students_api

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))


def page_url(page: int, page_size: int, **extra) -> str:
    """URL of the list page carrying the page view state"""
    params = {"page": page, "page_size": page_size}
    params.update({k: v for k, v in extra.items() if v is not None})
    return f"/students?{urlencode(params)}"


def page_view_state(page: int, page_size: Optional[str]) -> PageState:
    return PageState(current_page=page, page_size=resolve_page_size(page_size))


def redirect_to_page(state: PageState) -> RedirectResponse:
    return RedirectResponse(
        page_url(state.current_page, state.page_size),
        status_code=status.HTTP_303_SEE_OTHER
    )


def page_size_options(current: int):
    return sorted(set(settings.PAGE_SIZE_OPTIONS) | {current})


def render_page(request: Request, controller: StudentsController):
    state = controller.state
    return templates.TemplateResponse(request, "students.html", {
        "app_name": settings.APP_NAME,
        "students": controller.students,
        "form": controller.form,
        "page_info": controller.page_info,
        "state": state,
        "page_size_options": page_size_options(state.page_size),
        "prev_url": page_url(state.prev_page, state.page_size),
        "next_url": page_url(state.next_page, state.page_size),
        "page_url": page_url,
    })


@router.get("", response_class=HTMLResponse)
async def students_page(
    request: Request,
    page: int = Query(1, ge=1),
    page_size: Optional[str] = Query(None),
    edit: Optional[str] = Query(None, description="Id of the student to load into the form"),
    api: StudentsAPI = Depends(get_students_api)
):
    """
    Student list with the create/edit form.
    Prev/next links are built from the loaded (clamped) page state.
    """
    controller = StudentsController(api, current_page=page, page_size=page_size)
    await controller.load_students()
    if edit:
        controller.edit(edit)
    return render_page(request, controller)


@router.post("", response_class=HTMLResponse)
async def submit_student(
    request: Request,
    student_id: str = Form("", alias="studentId"),
    fullname: str = Form(""),
    email: str = Form(""),
    age: str = Form(""),
    page: int = Form(1, ge=1),
    page_size: Optional[str] = Form(None),
    api: StudentsAPI = Depends(get_students_api)
):
    """
    Create (empty id) or update (non-empty id) a student, then reload the current page.
    On failure the page is shown again with the submitted values kept.
    """
    controller = StudentsController(api, current_page=page, page_size=page_size)
    form = StudentForm(id=student_id, fullname=fullname, email=email, age=age)

    if await controller.save(form):
        return redirect_to_page(controller.state)

    await controller.load_students()
    return render_page(request, controller)


@router.get("/page-size")
async def change_page_size(page_size: Optional[str] = Query(None)):
    """New page size, back to page 1"""
    return redirect_to_page(page_view_state(1, page_size))


@router.get("/{student_id}/delete", response_class=HTMLResponse)
async def confirm_delete_page(
    request: Request,
    student_id: str,
    page: int = Query(1, ge=1),
    page_size: Optional[str] = Query(None)
):
    """Ask before deleting"""
    state = page_view_state(page, page_size)
    return templates.TemplateResponse(request, "confirm_delete.html", {
        "app_name": settings.APP_NAME,
        "student_id": student_id,
        "page": state.current_page,
        "page_size": state.page_size,
        "back_url": page_url(state.current_page, state.page_size),
    })


@router.post("/{student_id}/delete")
async def delete_student(
    student_id: str,
    confirm: str = Form(""),
    page: int = Form(1, ge=1),
    page_size: Optional[str] = Form(None),
    api: StudentsAPI = Depends(get_students_api)
):
    """Delete a student once the confirmation form says yes, then reload"""
    controller = StudentsController(api, current_page=page, page_size=page_size)
    await controller.delete(student_id, confirmed=confirm == "yes")
    return redirect_to_page(controller.state)
