# fairgroup/api/routers/assign.py
"""
Stateless grouping endpoints: every request brings its own students.
"""
import logging
from typing import List

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from fairgroup.domain.errors import InvalidGroupCount
from fairgroup.domain.models import GroupResultDTO, StudentDTO
from fairgroup.services.csv_import import CsvFormatError, parse_students_csv
from fairgroup.services.group_service import GroupService

logger = logging.getLogger(__name__)

router = APIRouter()


def _assign(students: List[StudentDTO], group: int) -> List[GroupResultDTO]:
    try:
        return GroupService().assign_groups(students, group)
    except InvalidGroupCount as e:
        raise HTTPException(status_code=400, detail=str(e))


def _decode(raw: bytes) -> List[StudentDTO]:
    try:
        return parse_students_csv(raw.decode("utf-8-sig"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV must be UTF-8 encoded")
    except CsvFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/", summary="Backend banner")
def hello():
    return "This is the backend for FairGroupAssignment"


@router.post("/assign/{group}", response_model=List[GroupResultDTO], summary="Assign JSON students to groups")
def assign_students(group: int, students: List[StudentDTO]):
    logger.info("Assigning %d submitted students to %d groups", len(students), group)
    return _assign(students, group)


@router.post(
    "/assign-csv/{group}",
    response_model=List[GroupResultDTO],
    summary="Assign students from a text/csv body",
    openapi_extra={"requestBody": {"content": {"text/csv": {"schema": {"type": "string"}}}, "required": True}},
)
async def assign_students_csv(group: int, request: Request):
    students = _decode(await request.body())
    logger.info("Assigning %d CSV students to %d groups", len(students), group)
    return _assign(students, group)


@router.post("/assign-file/{group}", response_model=List[GroupResultDTO], summary="Assign students from an uploaded CSV file")
async def assign_students_file(group: int, file: UploadFile = File(...)):
    students = _decode(await file.read())
    logger.info("Assigning %d students from %s to %d groups", len(students), file.filename, group)
    return _assign(students, group)
