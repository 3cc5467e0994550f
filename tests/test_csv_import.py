# tests/test_csv_import.py
import pytest

from fairgroup.services.csv_import import CsvFormatError, parse_students_csv


def test_parse_with_header_and_blank_lines():
    text = "name,grade\nAnn,4.5\n\nBen, 3\n"
    students = parse_students_csv(text)
    assert [(s.name, s.grade) for s in students] == [("Ann", 4.5), ("Ben", 3.0)]

def test_header_is_case_insensitive_and_bom_is_dropped():
    students = parse_students_csv("\ufeffName,Grade\r\nAnn,2.0\r\n")
    assert [s.name for s in students] == ["Ann"]

def test_extra_columns_ignored_and_short_rows_skipped():
    students = parse_students_csv("Ann,4.0,extra\nlonely\n,3.0\nBen,2.5")
    assert [(s.name, s.grade) for s in students] == [("Ann", 4.0), ("Ben", 2.5)]

def test_quoted_names():
    students = parse_students_csv('"Doe, Jane",3.5\n')
    assert students[0].name == "Doe, Jane"

def test_bad_grade_names_the_line():
    with pytest.raises(CsvFormatError) as exc:
        parse_students_csv("name,grade\nAnn,4.0\nBen,abc\n")
    assert "line 3" in str(exc.value)

def test_names_starting_with_name_are_students():
    students = parse_students_csv("Nameer,4.0\nNamesh,3.0\nAnn,2.0\n")
    assert [s.name for s in students] == ["Nameer", "Namesh", "Ann"]

def test_only_first_row_can_be_a_header():
    students = parse_students_csv("name,grade\nAnn,4.0\nname,3.0\n")
    assert [s.name for s in students] == ["Ann", "name"]
