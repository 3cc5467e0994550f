# fairgroup/domain/errors.py
"""
Exceptions raised by the grouping domain.
"""


class GroupingError(Exception):
    """Base class for grouping domain errors."""


class InvalidGroupCount(GroupingError, ValueError):
    """Group count is non-positive or exceeds the number of distinct students."""

    def __init__(self, group_count: int, roster_size: int):
        self.group_count = group_count
        self.roster_size = roster_size
        super().__init__(
            f"Cannot form {group_count} groups from {roster_size} students "
            "(minimum 1 student per group)."
        )


class InvalidGrade(GroupingError, ValueError):
    """Grade is not a finite number."""
