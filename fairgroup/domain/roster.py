# fairgroup/domain/roster.py
"""
Roster of graded students.

A roster is keyed by student name and keeps the first record submitted for a
name. Its snapshot is ordered by grade descending, then name ascending; the
partitioner draws from that order and the balancer relies on it.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple

from fairgroup.domain.errors import InvalidGrade

logger = logging.getLogger(__name__)

DEFAULT_GRADE_RANGE = (1.0, 5.0)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like a school report card: 2.25 -> 2.3, 2.24 -> 2.2."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class Student:
    name: str
    grade: float = field(compare=False)

    @classmethod
    def create(cls, name: str, grade: float) -> "Student":
        """Build a student, trimming the name and rounding the grade to one decimal."""
        name = (name or "").strip()
        if not name:
            raise ValueError("student name must not be empty")
        try:
            grade = float(grade)
        except (TypeError, ValueError):
            raise InvalidGrade(f"grade for {name!r} is not a number: {grade!r}") from None
        if not math.isfinite(grade):
            raise InvalidGrade(f"grade for {name!r} is not finite: {grade!r}")
        return cls(name=name, grade=round_half_up(grade, 1))


def roster_order_key(student: Student) -> Tuple[float, str]:
    return (-student.grade, student.name)


class Roster:
    """
    Deduplicated, ordered set of students for one grouping operation.

    grade_range: inclusive (low, high) bounds; students outside are skipped
    with a warning. Pass None to accept every grade.
    """

    def __init__(self, grade_range: Optional[Tuple[float, float]] = DEFAULT_GRADE_RANGE):
        self.grade_range = grade_range
        self._by_name: Dict[str, Student] = {}

    def add(self, student: Student) -> bool:
        if self.grade_range is not None:
            low, high = self.grade_range
            if student.grade < low or student.grade > high:
                logger.warning("Skipping student %s with invalid grade: %s", student.name, student.grade)
                return False
        if student.name in self._by_name:
            logger.debug("Ignoring duplicate student %s (keeping first record)", student.name)
            return False
        self._by_name[student.name] = student
        return True

    def add_many(self, students: Iterable[Student]) -> int:
        return sum(1 for s in students if self.add(s))

    def size(self) -> int:
        return len(self._by_name)

    def snapshot(self) -> Tuple[Student, ...]:
        return tuple(sorted(self._by_name.values(), key=roster_order_key))

    def clear(self):
        self._by_name.clear()

    def __len__(self):
        return len(self._by_name)

    def __contains__(self, name) -> bool:
        if isinstance(name, Student):
            name = name.name
        return name in self._by_name

    def __iter__(self) -> Iterator[Student]:
        return iter(self.snapshot())

    def __repr__(self):
        return f"Roster(size={len(self)})"
