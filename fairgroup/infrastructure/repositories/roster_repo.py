from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from fairgroup.domain.roster import Student
from fairgroup.infrastructure.models import RosterEntry, RosterSession


class RosterRepo:
    def __init__(self, db: Session):
        self.db = db

    def create(self, label: Optional[str] = None) -> RosterSession:
        r = RosterSession(label=label)
        self.db.add(r)
        self.db.commit()
        self.db.refresh(r)
        return r

    def get(self, roster_id: int) -> Optional[RosterSession]:
        return self.db.query(RosterSession).filter(RosterSession.id == roster_id).first()

    def list_entries(self, roster_id: int) -> List[RosterEntry]:
        return (
            self.db.query(RosterEntry)
            .filter(RosterEntry.roster_id == roster_id)
            .order_by(RosterEntry.id)
            .all()
        )

    def add_entries(self, roster_id: int, students: Iterable[Student]) -> int:
        count = 0
        for s in students:
            self.db.add(RosterEntry(roster_id=roster_id, name=s.name, grade=s.grade))
            count += 1
        self.db.commit()
        return count

    def delete(self, roster: RosterSession):
        self.db.delete(roster)
        self.db.commit()
