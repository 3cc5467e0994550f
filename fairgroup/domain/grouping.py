# fairgroup/domain/grouping.py
"""
Pure grouping logic: round-robin partition, swap balancing, group averages.

Groups are plain lists of Student, each kept in roster order
(grade descending, name ascending). Nothing here touches the database.

Functions included:
- partition_into_groups
- group_average
- average_spread
- Balancer (balance / balance_range / merge_and_balance / improve_by_swapping)
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from fairgroup.domain.errors import InvalidGroupCount
from fairgroup.domain.roster import Student, round_half_up, roster_order_key

logger = logging.getLogger(__name__)

Group = List[Student]

DEFAULT_MAX_ITERATIONS = 100

# floating point noise below this is not an improvement
EPSILON = 1e-9


def partition_into_groups(students: Sequence[Student], group_count: int) -> List[Group]:
    """
    Deal students into group_count groups, round-robin, in the given order.

    The first n % k groups receive one extra member. Drawing from a sequence
    in roster order leaves every group in roster order too.

    Example:
    >>> [len(g) for g in partition_into_groups(five_students, 2)]
    [3, 2]
    """
    n = len(students)
    if group_count <= 0 or group_count > n:
        raise InvalidGroupCount(group_count, n)

    base_size, extra = divmod(n, group_count)
    sizes = [base_size + (1 if i < extra else 0) for i in range(group_count)]
    groups: List[Group] = [[] for _ in range(group_count)]

    remaining = iter(students)
    drawn = 0
    while drawn < n:
        for idx in range(group_count):
            if len(groups[idx]) < sizes[idx]:
                groups[idx].append(next(remaining))
                drawn += 1
    return groups


def group_average(group: Sequence[Student]) -> float:
    """Average grade rounded to one decimal; 0.0 for an empty group."""
    if not group:
        return 0.0
    return round_half_up(sum(s.grade for s in group) / len(group), 1)


def average_spread(groups: Sequence[Sequence[Student]]) -> float:
    """Highest minus lowest group average."""
    if not groups:
        return 0.0
    averages = [group_average(g) for g in groups]
    return max(averages) - min(averages)


@dataclass(frozen=True)
class SwapRecord:
    high_group: int
    low_group: int
    moved_down: str
    moved_up: str
    diff_before: float
    diff_after: float


class Balancer:
    """
    Divide-and-conquer swap balancer.

    balance_range refines the two halves of an index range first and then
    merges them; the merge step repeatedly exchanges one member between the
    highest- and lowest-average group of the range until no exchange helps or
    max_iterations is reached. Every exchange is kept in self.swaps.
    """

    def __init__(self, max_iterations: int = DEFAULT_MAX_ITERATIONS):
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.max_iterations = max_iterations
        self.swaps: List[SwapRecord] = []

    def balance(self, groups: List[Group]) -> int:
        if not groups:
            return 0
        return self.balance_range(groups, 0, len(groups) - 1)

    def balance_range(self, groups: List[Group], left: int, right: int) -> int:
        if left >= right:
            return 0
        mid = left + (right - left) // 2
        swapped = self.balance_range(groups, left, mid)
        swapped += self.balance_range(groups, mid + 1, right)
        swapped += self.merge_and_balance(groups, left, right)
        return swapped

    def merge_and_balance(self, groups: List[Group], left: int, right: int) -> int:
        swapped = 0
        for _ in range(self.max_iterations):
            max_index: Optional[int] = None
            min_index: Optional[int] = None
            max_avg = min_avg = 0.0
            for idx in range(left, right + 1):
                avg = group_average(groups[idx])
                if max_index is None or avg > max_avg:
                    max_avg, max_index = avg, idx
                if min_index is None or avg < min_avg:
                    min_avg, min_index = avg, idx

            if max_index == min_index:
                break
            if not self.improve_by_swapping(groups, max_index, min_index):
                break
            swapped += 1
        else:
            logger.debug("merge_and_balance [%d, %d] hit the %d iteration cap", left, right, self.max_iterations)
        return swapped

    def improve_by_swapping(self, groups: List[Group], high: int, low: int) -> bool:
        """
        Exchange at most one member between groups[high] and groups[low].

        Single two-pointer pass over both groups (each in roster order). A
        pair qualifies when the exchange strictly narrows the gap between the
        two averages and both new averages stay between the old ones.
        """
        group_hi, group_lo = groups[high], groups[low]
        if not group_hi or not group_lo:
            return False

        n_hi, n_lo = len(group_hi), len(group_lo)
        sum_hi = sum(s.grade for s in group_hi)
        sum_lo = sum(s.grade for s in group_lo)
        avg_hi, avg_lo = sum_hi / n_hi, sum_lo / n_lo
        floor_avg, ceil_avg = min(avg_hi, avg_lo), max(avg_hi, avg_lo)
        diff_before = abs(avg_hi - avg_lo)

        best_diff = diff_before
        best = None
        p = q = 0
        while p < n_hi and q < n_lo:
            a, b = group_hi[p], group_lo[q]
            if a.grade != b.grade:
                new_hi = (sum_hi - a.grade + b.grade) / n_hi
                new_lo = (sum_lo - b.grade + a.grade) / n_lo
                diff = abs(new_hi - new_lo)
                if (
                    diff < best_diff - EPSILON
                    and floor_avg <= new_hi <= ceil_avg
                    and floor_avg <= new_lo <= ceil_avg
                ):
                    best_diff, best = diff, (p, q)
            if a.grade < b.grade:
                p += 1
            else:
                q += 1

        if best is None:
            return False

        a = group_hi.pop(best[0])
        b = group_lo.pop(best[1])
        group_hi.append(b)
        group_lo.append(a)
        group_hi.sort(key=roster_order_key)
        group_lo.sort(key=roster_order_key)

        self.swaps.append(SwapRecord(high, low, a.name, b.name, diff_before, best_diff))
        logger.debug(
            "Swapped %s (group %d) with %s (group %d): diff %.3f -> %.3f",
            a.name, high, b.name, low, diff_before, best_diff,
        )
        return True
