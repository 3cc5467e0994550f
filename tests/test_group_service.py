# tests/test_group_service.py
import pytest

from fairgroup.domain.errors import InvalidGroupCount
from fairgroup.domain.models import StudentDTO
from fairgroup.infrastructure.repositories.roster_repo import RosterRepo
from fairgroup.services.group_service import GroupService, RosterNotFound, to_student

RECORDS = [("A", 5.0), ("B", 4.0), ("C", 3.0), ("D", 2.0), ("E", 1.0)]

# -------------------------------
# Record conversion
# -------------------------------

def test_to_student_accepts_several_shapes():
    assert to_student(("A", 3.04)).grade == 3.0
    assert to_student({"name": "B", "grade": 2}).grade == 2.0
    assert to_student(StudentDTO(name="C", grade=4.56)).grade == 4.6

# -------------------------------
# Stateless assignment
# -------------------------------

def test_assign_groups_results():
    results = GroupService(grade_range=(1.0, 5.0)).assign_groups(RECORDS, 2)
    assert [r.group_number for r in results] == [1, 2]
    assert [r.average_grade for r in results] == [3.0, 3.0]
    assert [[s.name for s in r.students] for r in results] == [["A", "C", "E"], ["B", "D"]]

def test_results_serialize_with_camel_case_keys():
    result = GroupService().assign_groups(RECORDS, 1)[0]
    data = result.model_dump(by_alias=True)
    assert data["groupNumber"] == 1
    assert data["averageGrade"] == 3.0
    assert data["students"][0] == {"name": "A", "grade": 5.0}

def test_assign_skips_bad_and_duplicate_records():
    records = RECORDS + [("E", 4.0), ("Z", 9.0), ("", 3.0), ("Q", "n/a")]
    results = GroupService(grade_range=(1.0, 5.0)).assign_groups(records, 5)
    assert sorted(s.name for r in results for s in r.students) == ["A", "B", "C", "D", "E"]
    e = [s for r in results for s in r.students if s.name == "E"][0]
    assert e.grade == 1.0

def test_malformed_records_do_not_abort_the_batch():
    class Nameless:
        grade = 3.0

    records = [("A", 3.0), ("B",), Nameless(), {"grade": 2.0}, (7, 2.0), ("C", 2.0)]
    results = GroupService(grade_range=(1.0, 5.0)).assign_groups(records, 1)
    assert [s.name for s in results[0].students] == ["A", "C"]

def test_default_range_comes_from_settings():
    assert GroupService().grade_range == (1.0, 5.0)

def test_group_count_counts_accepted_students_only():
    with pytest.raises(InvalidGroupCount):
        GroupService(grade_range=(1.0, 5.0)).assign_groups([("A", 3.0), ("B", 0.2)], 2)

def test_validation_can_be_disabled():
    results = GroupService(grade_range=None).assign_groups([("A", 9.0), ("B", 0.0)], 1)
    assert results[0].average_grade == 4.5

def test_stateless_calls_do_not_leak():
    service = GroupService()
    service.assign_groups(RECORDS, 2)
    results = service.assign_groups([("X", 2.0)], 1)
    assert [s.name for s in results[0].students] == ["X"]

# -------------------------------
# Roster sessions
# -------------------------------

@pytest.fixture
def service(db_session):
    return GroupService(roster_repo=RosterRepo(db_session), grade_range=(1.0, 5.0))

def test_roster_session_lifecycle(service):
    roster = service.open_roster(label="Class 7b")
    assert roster.label == "Class 7b"

    first = service.add_to_roster(roster.id, RECORDS[:3])
    assert (first.added, first.skipped, first.size) == (3, 0, 3)

    second = service.add_to_roster(roster.id, RECORDS[3:] + [("A", 1.0), ("Z", 7.5)])
    assert (second.added, second.skipped, second.size) == (2, 2, 5)

    loaded = service.get_roster(roster.id)
    assert [s.name for s in loaded.students] == ["A", "B", "C", "D", "E"]
    assert loaded.students[0].grade == 5.0

    results = service.assign_roster(roster.id, 2)
    assert [r.average_grade for r in results] == [3.0, 3.0]
    # assigning does not consume the roster
    assert len(service.assign_roster(roster.id, 5)) == 5

    service.close_roster(roster.id)
    with pytest.raises(RosterNotFound):
        service.get_roster(roster.id)

def test_roster_sessions_are_isolated(service):
    a = service.open_roster()
    b = service.open_roster()
    service.add_to_roster(a.id, RECORDS)
    service.add_to_roster(b.id, [("X", 3.0)])
    assert len(service.get_roster(a.id).students) == 5
    assert [s.name for s in service.get_roster(b.id).students] == ["X"]

def test_unknown_roster(service):
    with pytest.raises(RosterNotFound):
        service.add_to_roster(999, RECORDS)
    with pytest.raises(RosterNotFound):
        service.assign_roster(999, 2)
    with pytest.raises(RosterNotFound):
        service.close_roster(999)

def test_assign_roster_invalid_group_count(service):
    roster = service.open_roster()
    service.add_to_roster(roster.id, RECORDS[:2])
    with pytest.raises(InvalidGroupCount):
        service.assign_roster(roster.id, 3)

def test_sessions_need_a_repo():
    with pytest.raises(RuntimeError):
        GroupService().open_roster()

def test_stored_names_stay_duplicates_after_range_change(db_session):
    wide = GroupService(roster_repo=RosterRepo(db_session), grade_range=(1.0, 5.0))
    roster = wide.open_roster()
    wide.add_to_roster(roster.id, [("A", 4.5), ("B", 2.0)])

    narrow = GroupService(roster_repo=RosterRepo(db_session), grade_range=(1.0, 4.0))
    result = narrow.add_to_roster(roster.id, [("A", 3.0), ("C", 3.5)])
    assert (result.added, result.skipped, result.size) == (1, 1, 3)
    # grouping still applies the current range
    assert [s.name for s in narrow.get_roster(roster.id).students] == ["C", "B"]
