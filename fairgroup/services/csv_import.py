# fairgroup/services/csv_import.py
"""
CSV roster parsing for the upload endpoints.

Rules:
- blank lines are skipped; the first non-blank row is a header only when its
  first cell is exactly "name" (any case)
- the first two columns are name and grade, extra columns are ignored
- rows with fewer than two columns are ignored
- a grade that is not a number is an error naming the line
"""
import csv
import io
import logging
from typing import List

from fairgroup.domain.models import StudentDTO


logger = logging.getLogger(__name__)


class CsvFormatError(ValueError):
    pass


def parse_students_csv(text: str) -> List[StudentDTO]:
    if text.startswith("\ufeff"):
        text = text[1:]
    students = []
    seen_first_row = False
    for line_no, row in enumerate(csv.reader(io.StringIO(text)), start=1):
        if not row or not "".join(row).strip():
            continue
        if not seen_first_row:
            seen_first_row = True
            if row[0].strip().lower() == "name":
                continue
        if len(row) < 2 or not row[0].strip():
            logger.warning("Skipping CSV line %d: expected name,grade but got %r", line_no, row)
            continue
        name, grade = row[0].strip(), row[1].strip()
        try:
            value = float(grade)
        except ValueError:
            raise CsvFormatError(f"line {line_no}: grade {grade!r} for {name!r} is not a number") from None
        students.append(StudentDTO(name=name, grade=value))
    return students
