# fairgroup/services/group_service.py
"""
Service layer: turns submitted (name, grade) records into balanced groups.

A fresh Roster and Balancer are built for every call; roster sessions that
accumulate students over several requests live in the database and are only
touched through RosterRepo.
"""
import logging
from typing import Any, Iterable, List, Optional, Tuple

from fairgroup.config.settings import settings
from fairgroup.domain.grouping import Balancer, average_spread, group_average, partition_into_groups
from fairgroup.domain.models import AddStudentsResultDTO, GroupResultDTO, RosterDTO, StudentDTO
from fairgroup.domain.roster import Roster, Student
from fairgroup.infrastructure.repositories.roster_repo import RosterRepo

logger = logging.getLogger(__name__)


class RosterNotFound(LookupError):
    def __init__(self, roster_id: int):
        self.roster_id = roster_id
        super().__init__(f"Roster {roster_id} not found")


def to_student(record: Any) -> Student:
    """Accept a Student, a (name, grade) pair, a dict or any object with name/grade."""
    if isinstance(record, Student):
        return record
    if isinstance(record, (tuple, list)):
        if len(record) < 2:
            raise ValueError(f"expected a (name, grade) pair, got {record!r}")
        name, grade = record[0], record[1]
    elif isinstance(record, dict):
        name, grade = record.get("name"), record.get("grade")
    else:
        name, grade = getattr(record, "name", None), getattr(record, "grade", None)
    if name is not None and not isinstance(name, str):
        raise ValueError(f"student name must be a string, got {name!r}")
    return Student.create(name, grade)


def to_results(groups: List[List[Student]]) -> List[GroupResultDTO]:
    """Group numbers are 1-based; members are listed in roster order."""
    return [
        GroupResultDTO(
            group_number=i + 1,
            average_grade=group_average(g),
            students=[StudentDTO(name=s.name, grade=s.grade) for s in g],
        )
        for i, g in enumerate(groups)
    ]


# grade_range default: take the range from settings
FROM_SETTINGS = object()


class GroupService:
    def __init__(
        self,
        roster_repo: Optional[RosterRepo] = None,
        grade_range: Any = FROM_SETTINGS,
        max_iterations: Optional[int] = None,
    ):
        self.roster_repo = roster_repo
        if grade_range is FROM_SETTINGS:
            grade_range = (settings.GRADE_MIN, settings.GRADE_MAX) if settings.VALIDATE_GRADES else None
        self.grade_range = grade_range
        self.max_iterations = max_iterations or settings.MAX_BALANCE_ITERATIONS

    # ----------------------------
    # Stateless grouping
    # ----------------------------

    def _accept(self, roster: Roster, records: Iterable[Any]) -> List[Student]:
        """Add records to roster, returning the students it accepted in submission order."""
        accepted = []
        for record in records:
            try:
                student = to_student(record)
            except ValueError as e:
                logger.warning("Skipping record %r: %s", record, e)
                continue
            if roster.add(student):
                accepted.append(student)
        return accepted

    def build_roster(self, records: Iterable[Any]) -> Tuple[Roster, List[Student]]:
        roster = Roster(grade_range=self.grade_range)
        return roster, self._accept(roster, records)

    def make_groups(self, roster: Roster, group_count: int) -> List[List[Student]]:
        groups = partition_into_groups(roster.snapshot(), group_count)
        spread_before = average_spread(groups)
        balancer = Balancer(max_iterations=self.max_iterations)
        swaps = balancer.balance(groups)
        logger.info(
            "Formed %d groups from %d students: %d swaps, spread %.1f -> %.1f",
            group_count, len(roster), swaps, spread_before, average_spread(groups),
        )
        return groups

    def assign_groups(self, records: Iterable[Any], group_count: int) -> List[GroupResultDTO]:
        roster, _ = self.build_roster(records)
        return to_results(self.make_groups(roster, group_count))

    # ----------------------------
    # Roster sessions
    # ----------------------------

    def _repo(self) -> RosterRepo:
        if self.roster_repo is None:
            raise RuntimeError("GroupService was created without a RosterRepo")
        return self.roster_repo

    def _get_session(self, roster_id: int):
        roster = self._repo().get(roster_id)
        if not roster:
            raise RosterNotFound(roster_id)
        return roster

    def _load_roster(self, roster_id: int, grade_range: Any = FROM_SETTINGS) -> Roster:
        """grade_range defaults to the service range; None loads every stored entry."""
        self._get_session(roster_id)
        if grade_range is FROM_SETTINGS:
            grade_range = self.grade_range
        roster = Roster(grade_range=grade_range)
        roster.add_many(Student(name=e.name, grade=e.grade) for e in self._repo().list_entries(roster_id))
        return roster

    def open_roster(self, label: Optional[str] = None) -> RosterDTO:
        r = self._repo().create(label=label)
        logger.info("Opened roster %s", r.id)
        return RosterDTO(id=r.id, label=r.label, created_at=r.created_at)

    def add_to_roster(self, roster_id: int, records: Iterable[Any]) -> AddStudentsResultDTO:
        # stored names always count as duplicates, even if the grade range changed since
        roster = self._load_roster(roster_id, grade_range=None)
        roster.grade_range = self.grade_range
        before = len(roster)
        records = list(records)
        added = self._accept(roster, records)
        self._repo().add_entries(roster_id, added)
        return AddStudentsResultDTO(
            added=len(added),
            skipped=len(records) - len(added),
            size=before + len(added),
        )

    def get_roster(self, roster_id: int) -> RosterDTO:
        session = self._get_session(roster_id)
        roster = self._load_roster(roster_id)
        return RosterDTO(
            id=session.id,
            label=session.label,
            created_at=session.created_at,
            students=[StudentDTO(name=s.name, grade=s.grade) for s in roster.snapshot()],
        )

    def assign_roster(self, roster_id: int, group_count: int) -> List[GroupResultDTO]:
        roster = self._load_roster(roster_id)
        return to_results(self.make_groups(roster, group_count))

    def close_roster(self, roster_id: int):
        session = self._get_session(roster_id)
        self._repo().delete(session)
        logger.info("Closed roster %s", roster_id)
