"""
Tests for the OOC scheduler: week ordering, greedy matching, the week-0
strategy, result accounting and the hard constraints on every output.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ooc_scheduler.models import Team, OOCGame, Bye, Empty, ConfHome, ConfAway, LockedOOC, normalize_name
from ooc_scheduler.core.config import NO_PAIRINGS_REASON
from ooc_scheduler.services.csv_codec import parse_week_cell, teams_to_csv
from ooc_scheduler.services.scheduler import build_week_order, generate, OOCScheduler
from ooc_scheduler.services.validator import ScheduleValidator


def make_team(name, conference, ooc_needed=0, cells=None):
    cells = list(cells or [])
    cells += [""] * (14 - len(cells))
    return Team(name=name, conference=conference, ooc_needed=ooc_needed,
                weeks=[parse_week_cell(c) for c in cells])


def new_games(before, after):
    """(team, week, slot) for every OOCGame the scheduler added."""
    games = []
    for team_before, team_after in zip(before, after):
        for week, (old, new) in enumerate(zip(team_before.weeks, team_after.weeks)):
            if isinstance(new, OOCGame) and old != new:
                games.append((team_after, week, new))
    return games


def sample_league():
    """Three conferences with conference games, locked games and byes."""
    return [
        make_team("Alpha", "East", 3, ["", "h", "a", "h", "a", "h", "a", "h", "", "", "", "", "", ""]),
        make_team("Bravo", "East", 2, ["", "a", "h", "a", "h", "a", "h", "a", "", "", "", "", "", ""]),
        make_team("Charlie", "East", 4, ["", "", "h", "a", "", "h", "a", "", "h", "a", "", "", "", ""]),
        make_team("Delta", "West", 3, ["", "h", "a", "@Alpha", "a", "h", "a", "", "", "", "", "", "", ""]),
        make_team("Echo", "West", 2, ["", "a", "h", "h", "", "a", "h", "a", "BYE", "", "", "", "", ""]),
        make_team("Foxtrot", "West", 5, ["", "", "", "", "", "", "", "", "", "", "", "", "", ""]),
        make_team("Golf", "South", 3, ["", "h", "a", "h", "a", "h", "a", "h", "a", "h", "a", "", "", ""]),
        make_team("Hotel", "South", 3, ["", "a", "h", "a", "h", "a", "h", "a", "h", "a", "h", "", "", ""]),
    ]


def test_week_order():
    print("Testing week order...")

    assert build_week_order(True) == list(range(1, 14)) + [0]
    assert build_week_order(False) == list(range(14))

    print("[PASS] Week order test passed")


def test_scenario_two_teams():
    """Two compatible teams meet in week 1, alphabetical first hosts."""
    print("Testing two-team scenario...")

    teams = [make_team("Alpha", "East", 1), make_team("Beta", "West", 1)]
    result = generate(teams)

    assert result.ok
    assert (result.needed_ooc, result.scheduled_ooc, result.unscheduled) == (2, 2, 0)
    alpha, beta = result.teams
    assert alpha.weeks[1] == OOCGame(opponent="Beta", is_away=False)
    assert beta.weeks[1] == OOCGame(opponent="Alpha", is_away=True)
    assert alpha.count_slots(OOCGame) == 1 and beta.count_slots(OOCGame) == 1
    assert alpha.weeks[0] == Empty()

    # Caller's teams untouched
    assert all(slot == Empty() for team in teams for slot in team.weeks)

    print("[PASS] Two-team scenario test passed")


def test_scenario_same_conference_fails():
    print("Testing same-conference scenario...")

    teams = [make_team(name, "East", 1) for name in ("Alpha", "Bravo", "Charlie")]
    result = generate(teams)

    assert not result.ok
    assert result.reason == NO_PAIRINGS_REASON
    assert result.needed_ooc == 3
    assert result.scheduled_ooc == 0
    assert result.unscheduled == 3
    assert result.teams is None
    assert result.get_summary() == f"Failed to generate schedule: {NO_PAIRINGS_REASON}"

    print("[PASS] Same-conference scenario test passed")


def test_scenario_locked_game_excludes_team():
    """A team whose need is covered by a locked game is never paired."""
    print("Testing locked-game scenario...")

    alpha = make_team("Alpha", "East", 1, ["", "", "", "", "", "Beta"])
    beta = make_team("Beta", "West", 1, ["", "", "", "", "", "@Alpha"])
    charlie = make_team("Charlie", "West", 1)
    result = generate([alpha, beta, charlie])

    # Alpha and Beta are covered; Charlie has nobody left to play
    assert not result.ok
    assert result.needed_ooc == 1

    print("[PASS] Locked-game scenario test passed")


def test_scenario_week0_used_when_only_option():
    """Week 0 is deferred, not excluded."""
    print("Testing week-0 fallback scenario...")

    alpha_cells = [""] + ["h", "a"] * 5 + ["h", "", ""]         # open: 0, 12, 13
    bravo_cells = [""] + ["a", "h"] * 4 + ["a", "", "", "h", "a"]  # open: 0, 10, 11
    alpha = make_team("Alpha", "East", 1, alpha_cells)
    bravo = make_team("Bravo", "West", 1, bravo_cells)

    result = generate([alpha, bravo], avoid_week0=True)

    assert result.ok
    assert result.unscheduled == 0
    scheduled_alpha, scheduled_bravo = result.teams
    assert isinstance(scheduled_alpha.weeks[0], OOCGame)
    assert isinstance(scheduled_bravo.weeks[0], OOCGame)
    assert scheduled_alpha.weeks[0].is_away != scheduled_bravo.weeks[0].is_away

    print("[PASS] Week-0 fallback scenario test passed")


def test_week0_first_when_not_avoided():
    print("Testing week 0 without avoidance...")

    teams = [make_team("Alpha", "East", 1), make_team("Beta", "West", 1)]
    result = generate(teams, avoid_week0=False)

    assert isinstance(result.teams[0].weeks[0], OOCGame)
    assert result.teams[0].weeks[1] == Empty()

    print("[PASS] Week 0 without avoidance test passed")


def test_scarce_team_served_first():
    """The team with fewer open weeks gets the shared opponent."""
    print("Testing scarcity ordering...")

    alpha = make_team("Alpha", "East", 1)
    bravo = make_team("Bravo", "West", 1)
    charlie = make_team("Charlie", "West", 1, ["", "", "h", "a", "h", "a", "h", "a", "h", "a", "h", "a"])

    result = generate([alpha, bravo, charlie])

    assert result.ok
    assert result.teams[0].weeks[1].opponent == "Charlie"
    assert result.teams[1].count_slots(OOCGame) == 0
    assert (result.needed_ooc, result.scheduled_ooc, result.unscheduled) == (3, 2, 1)
    assert result.is_partial
    assert result.get_summary() == "Scheduled 2 of 3 OOC games. 1 remain unscheduled."

    print("[PASS] Scarcity ordering test passed")


def test_home_away_balances_existing_games():
    print("Testing home/away balancing...")

    alpha = make_team("Alpha", "East", 1, ["", "h", "h"])
    bravo = make_team("Bravo", "West", 1, ["", "a"])
    result = generate([alpha, bravo])

    # Bravo has fewer home games so it hosts
    assert result.teams[1].weeks[3] == OOCGame(opponent="Alpha", is_away=False)
    assert result.teams[0].weeks[3] == OOCGame(opponent="Bravo", is_away=True)

    print("[PASS] Home/away balancing test passed")


def test_no_repeat_opponents():
    """Two teams needing several games still meet only once."""
    print("Testing repeat opponents...")

    result = generate([make_team("Alpha", "East", 3), make_team("Beta", "West", 3)])

    assert result.ok
    assert result.teams[0].count_slots(OOCGame) == 1
    assert result.unscheduled == 4

    print("[PASS] Repeat opponent test passed")


def test_game_cap_respected():
    print("Testing 12-game cap...")

    cells = ["h", "a"] * 5 + ["h"]  # 11 games
    alpha = make_team("Alpha", "East", 3, cells)
    others = [make_team(name, "West", 1) for name in ("Bravo", "Charlie", "Delta")]
    result = generate([alpha] + others)

    assert result.ok
    assert result.teams[0].count_slots(ConfHome, ConfAway, OOCGame, LockedOOC) == 12
    assert result.scheduled_ooc == 2

    print("[PASS] 12-game cap test passed")


def test_league_constraints():
    """Every hard constraint holds on a mixed league."""
    print("Testing constraints on a league...")

    teams = sample_league()
    result = generate(teams)
    assert result.ok

    # Fixed slots untouched, cap, opponents, symmetry
    validation = ScheduleValidator().validate_schedule(teams, result.teams)
    assert validation.is_valid, [v.description for v in validation.hard_constraint_violations]

    by_key = {team.key: team for team in result.teams}
    for team, week, slot in new_games(teams, result.teams):
        opponent = by_key[normalize_name(slot.opponent)]
        assert opponent.conference != team.conference
        mirrored = opponent.weeks[week]
        assert isinstance(mirrored, OOCGame)
        assert mirrored.opponent == team.name
        assert mirrored.is_away != slot.is_away

    for team in result.teams:
        assert team.count_slots(ConfHome, ConfAway, OOCGame, LockedOOC) <= 12
        opponents = [normalize_name(s.opponent) for s in team.weeks if isinstance(s, (OOCGame, LockedOOC))]
        assert len(opponents) == len(set(opponents))
        assert team.key not in opponents

    print("[PASS] League constraint test passed")


def test_progress_accounting():
    print("Testing progress accounting...")

    teams = sample_league()
    result = generate(teams)

    added = new_games(teams, result.teams)
    assert result.needed_ooc - result.unscheduled == result.scheduled_ooc
    # One game fills one slot on each side and lowers both teams' need
    assert result.scheduled_ooc == len(added)
    assert len(added) % 2 == 0

    print("[PASS] Progress accounting test passed")


def test_deterministic_output():
    print("Testing determinism...")

    first = generate(sample_league())
    second = generate(sample_league())

    assert teams_to_csv(first.teams) == teams_to_csv(second.teams)
    assert first.to_dict() == second.to_dict()

    print("[PASS] Determinism test passed")


def test_optimize_schedule_assigns_byes():
    print("Testing full scheduling run...")

    teams = [make_team("Alpha", "East", 1), make_team("Beta", "West", 1)]
    scheduler = OOCScheduler(teams)
    result = scheduler.optimize_schedule()

    assert result.ok
    assert scheduler.result is result
    for team in result.teams:
        assert [week for week, slot in enumerate(team.weeks) if isinstance(slot, Bye)] == [2, 3, 4]
        assert isinstance(team.weeks[1], OOCGame)

    print("[PASS] Full scheduling run test passed")


def test_optimize_schedule_failure_skips_byes():
    teams = [make_team("Alpha", "East", 1), make_team("Bravo", "East", 1)]
    result = OOCScheduler(teams).optimize_schedule()

    assert not result.ok
    assert all(slot == Empty() for team in teams for slot in team.weeks)


if __name__ == '__main__':
    test_week_order()
    test_scenario_two_teams()
    test_scenario_same_conference_fails()
    test_scenario_locked_game_excludes_team()
    test_scenario_week0_used_when_only_option()
    test_week0_first_when_not_avoided()
    test_scarce_team_served_first()
    test_home_away_balances_existing_games()
    test_no_repeat_opponents()
    test_game_cap_respected()
    test_league_constraints()
    test_progress_accounting()
    test_deterministic_output()
    test_optimize_schedule_assigns_byes()
    test_optimize_schedule_failure_skips_byes()
