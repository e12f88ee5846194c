"""
Tests for bye week distribution.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ooc_scheduler.models import Team, Bye, Empty, ConfHome
from ooc_scheduler.services.csv_codec import parse_week_cell
from ooc_scheduler.services.byes import assign_byes


def make_team(name, conference, cells):
    cells = list(cells)
    cells += [""] * (14 - len(cells))
    return Team(name=name, conference=conference, ooc_needed=0,
                weeks=[parse_week_cell(c) for c in cells])


def bye_weeks(team):
    return [week for week, slot in enumerate(team.weeks) if isinstance(slot, Bye)]


def test_byes_skip_week0_first():
    print("Testing bye placement order...")

    team = make_team("Alpha", "East", [])
    added = assign_byes([team], avoid_week0=True)

    assert added == 3
    assert bye_weeks(team) == [1, 2, 3]
    assert team.weeks[0] == Empty()

    print("[PASS] Bye placement order test passed")


def test_byes_fall_back_to_week0():
    """Week 0 is used when nothing else is open, even when avoided."""
    print("Testing week-0 bye fallback...")

    cells = [""] + ["h"] * 12 + [""]
    team = make_team("Alpha", "East", cells)
    assign_byes([team], avoid_week0=True)

    assert bye_weeks(team) == [0, 13]

    print("[PASS] Week-0 bye fallback test passed")


def test_existing_byes_count_toward_cap():
    print("Testing existing byes...")

    team = make_team("Alpha", "East", ["", "BYE", "h", "BYE"])
    added = assign_byes([team])

    assert added == 1
    assert bye_weeks(team) == [1, 3, 4]

    print("[PASS] Existing bye test passed")


def test_byes_round_robin():
    """Every team gets its Nth bye before anyone gets an N+1th."""
    print("Testing round-robin byes...")

    full = make_team("Alpha", "East", ["h"] * 12 + ["", ""])
    open_team = make_team("Bravo", "West", [])
    assign_byes([full, open_team])

    assert bye_weeks(full) == [12, 13]
    assert bye_weeks(open_team) == [1, 2, 3]

    print("[PASS] Round-robin bye test passed")


def test_byes_idempotent():
    print("Testing repeated bye passes...")

    teams = [
        make_team("Alpha", "East", ["", "h", "", "a"]),
        make_team("Bravo", "West", ["BYE", "BYE", "BYE", "BYE"]),
    ]
    assign_byes(teams)
    snapshot = [list(team.weeks) for team in teams]
    assert assign_byes(teams) == 0

    for team, before in zip(teams, snapshot):
        assert team.weeks == before
        assert len(bye_weeks(team)) <= 3 or team.name == "Bravo"
    assert teams[0].weeks[1] == ConfHome()
    # Pre-existing byes above the cap are left alone
    assert bye_weeks(teams[1]) == [0, 1, 2, 3]

    print("[PASS] Repeated bye pass test passed")


if __name__ == '__main__':
    test_byes_skip_week0_first()
    test_byes_fall_back_to_week0()
    test_existing_byes_count_toward_cap()
    test_byes_round_robin()
    test_byes_idempotent()
