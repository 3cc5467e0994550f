# fairgroup/api/routers/rosters.py
"""
Roster session endpoints: open a roster, add students over several
requests, assign groups as often as needed, close it when done.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fairgroup.domain.errors import InvalidGroupCount
from fairgroup.domain.models import AddStudentsResultDTO, GroupResultDTO, RosterDTO, StudentDTO
from fairgroup.infrastructure.db.session import get_db
from fairgroup.infrastructure.repositories.roster_repo import RosterRepo
from fairgroup.services.group_service import GroupService, RosterNotFound

router = APIRouter()


class OpenRosterReq(BaseModel):
    label: Optional[str] = None


def get_service(db: Session = Depends(get_db)) -> GroupService:
    return GroupService(roster_repo=RosterRepo(db))


@router.post("", response_model=RosterDTO, summary="Open a roster session")
@router.post("/", response_model=RosterDTO, include_in_schema=False)
def open_roster(req: Optional[OpenRosterReq] = None, service: GroupService = Depends(get_service)):
    return service.open_roster(label=req.label if req else None)


@router.get("/{roster_id}", response_model=RosterDTO, summary="Get roster students in roster order")
def get_roster(roster_id: int, service: GroupService = Depends(get_service)):
    try:
        return service.get_roster(roster_id)
    except RosterNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{roster_id}/students", response_model=AddStudentsResultDTO, summary="Add students to a roster")
def add_students(roster_id: int, students: List[StudentDTO], service: GroupService = Depends(get_service)):
    try:
        return service.add_to_roster(roster_id, students)
    except RosterNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{roster_id}/assign/{group}", response_model=List[GroupResultDTO], summary="Assign the roster to groups")
def assign_roster(roster_id: int, group: int, service: GroupService = Depends(get_service)):
    try:
        return service.assign_roster(roster_id, group)
    except RosterNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidGroupCount as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{roster_id}", summary="Close a roster session")
def close_roster(roster_id: int, service: GroupService = Depends(get_service)):
    try:
        service.close_roster(roster_id)
    except RosterNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "ok", "closed": roster_id}
