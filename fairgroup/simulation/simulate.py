# fairgroup/simulation/simulate.py
"""
Simulation script: creates a roster of fake students with random grades,
deals them into groups and balances them, then prints every group and the
spread of averages before and after balancing.

Uses the domain directly (no HTTP calls, no database).

    python -m fairgroup.simulation.simulate -n 30 -k 4 --seed 1
"""
import argparse
import random
from typing import List

from faker import Faker

from fairgroup.domain.grouping import Balancer, average_spread, group_average, partition_into_groups
from fairgroup.domain.roster import Roster, Student


def fake_students(count: int, seed=None, low: float = 1.0, high: float = 5.0) -> List[Student]:
    fake = Faker()
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)
    return [Student.create(fake.unique.name(), rng.uniform(low, high)) for _ in range(count)]


def run_simulation(num_students: int, group_count: int, seed=None, max_iterations: int = 100):
    roster = Roster()
    roster.add_many(fake_students(num_students, seed=seed))

    groups = partition_into_groups(roster.snapshot(), group_count)
    before = average_spread(groups)

    balancer = Balancer(max_iterations=max_iterations)
    balancer.balance(groups)

    for i, g in enumerate(groups, start=1):
        print(f"Group {i} (avg {group_average(g)})")
        for s in g:
            print(f"  - {s.name} | {s.grade}")
    print(f"Swaps: {len(balancer.swaps)}")
    print(f"Spread: {before:.1f} -> {average_spread(groups):.1f}")
    return groups, balancer


def main():
    parser = argparse.ArgumentParser(description="Simulate fair group assignment on a fake roster.")
    parser.add_argument("-n", "--num", type=int, default=30, help="Number of students (default: 30)")
    parser.add_argument("-k", "--groups", type=int, default=4, help="Number of groups (default: 4)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible rosters")
    parser.add_argument("--max-iterations", type=int, default=100, help="Swap cap per merge step")
    args = parser.parse_args()

    run_simulation(args.num, args.groups, seed=args.seed, max_iterations=args.max_iterations)


if __name__ == "__main__":
    main()
