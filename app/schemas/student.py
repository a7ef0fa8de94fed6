from pydantic import BaseModel, validator
from typing import Optional, List
import re

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value) -> Optional[int]:
    """
    Parse the leading base-10 integer of a form value.
    "42", " 42 " and "42 years" all give 42; no leading digits gives None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group(1))


class StudentBase(BaseModel):
    fullname: str
    email: str
    age: Optional[int] = None


class StudentResponse(StudentBase):
    id: str

    @validator('id', pre=True)
    def coerce_id(cls, v):
        # Backend ids are numeric, the page treats them as opaque text
        return str(v)


class StudentForm(BaseModel):
    """Values read from the student form. An empty id means "not yet created"."""
    id: str = ""
    fullname: str = ""
    email: str = ""
    age: Optional[int] = None

    @validator('id', 'fullname', 'email', pre=True)
    def trim_text(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @validator('age', pre=True)
    def parse_age(cls, v):
        return parse_int(v)

    @classmethod
    def from_student(cls, student: StudentResponse) -> "StudentForm":
        return cls(
            id=student.id,
            fullname=student.fullname,
            email=student.email,
            age=student.age
        )

    @property
    def is_new(self) -> bool:
        return not self.id

    def create_payload(self) -> dict:
        return {"fullname": self.fullname, "email": self.email, "age": self.age}

    def update_payload(self) -> dict:
        return {"id": self.id, **self.create_payload()}


class StudentPage(BaseModel):
    """One page of the remote list: the rows plus the total record count"""
    students: List[StudentResponse]
    total: int
