"""
Pairing rules shared by the week-by-week matcher: feasibility, home/away
choice, and the two-phase placement of a game on two team states.
"""

from typing import Tuple

from ooc_scheduler.models import TeamState, GamePlacement, OOCGame, Empty, Bye
from ooc_scheduler.core.config import MAX_GAMES_PER_TEAM


def can_pair(a: TeamState, b: TeamState) -> bool:
    """Whether two teams may meet at all, ignoring which week."""
    if a is None or b is None:
        return False
    if a.key == b.key:
        return False
    if a.conference == b.conference:
        return False
    if a.ooc_remaining <= 0 or b.ooc_remaining <= 0:
        return False
    if a.total_games >= MAX_GAMES_PER_TEAM or b.total_games >= MAX_GAMES_PER_TEAM:
        return False
    if b.key in a.played_opponents or a.key in b.played_opponents:
        return False
    return True


def assign_sides(a: TeamState, b: TeamState) -> Tuple[TeamState, TeamState]:
    """
    Pick (home, away) for a pairing.

    Fewer home games hosts; then more away games hosts; then the smaller key.
    """
    if a.home_games != b.home_games:
        return (a, b) if a.home_games < b.home_games else (b, a)
    if a.away_games != b.away_games:
        return (a, b) if a.away_games > b.away_games else (b, a)
    return (a, b) if a.key < b.key else (b, a)


def propose_game(a: TeamState, b: TeamState, week: int) -> GamePlacement:
    """Decide sides for a game without touching either team."""
    home, away = assign_sides(a, b)
    return GamePlacement(home=home, away=away, week=week)


def commit_game(placement: GamePlacement) -> None:
    """
    Write a proposed game into both teams and their states.

    Raises:
        ValueError: If either team's slot at that week is not open
    """
    home, away, week = placement.home, placement.away, placement.week

    for state in (home, away):
        if week not in state.available_weeks or not isinstance(state.team.weeks[week], (Empty, Bye)):
            raise ValueError(f"{state.name}: week {week} is not open")

    home.team.weeks[week] = OOCGame(opponent=away.name, is_away=False)
    away.team.weeks[week] = OOCGame(opponent=home.name, is_away=True)

    for state in (home, away):
        state.total_games += 1
        state.ooc_remaining -= 1
        state.available_weeks.remove(week)
    home.home_games += 1
    away.away_games += 1
    home.played_opponents.add(away.key)
    away.played_opponents.add(home.key)
