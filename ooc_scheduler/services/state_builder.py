"""
Builds the mutable scheduling state for a roster of teams.
"""

from typing import List, Dict, Tuple

from ooc_scheduler.models import (
    Team, TeamState, ConfHome, ConfAway, LockedOOC, OOCGame, Bye, Empty,
    normalize_name
)


def build_team_state(team: Team) -> TeamState:
    """
    Classify a team's week slots into counts, opponents and open weeks.

    Locked OOC games reduce the remaining OOC need; games already placed by
    the scheduler count toward totals but not toward the locked count.
    """
    state = TeamState(team=team, key=team.key, conference=team.conference)
    locked_ooc = 0

    for week, slot in enumerate(team.weeks):
        if isinstance(slot, ConfHome):
            state.total_games += 1
            state.home_games += 1
        elif isinstance(slot, ConfAway):
            state.total_games += 1
            state.away_games += 1
        elif isinstance(slot, (LockedOOC, OOCGame)):
            state.total_games += 1
            if isinstance(slot, LockedOOC):
                locked_ooc += 1
            if slot.is_away:
                state.away_games += 1
            else:
                state.home_games += 1
            if slot.opponent:
                state.played_opponents.add(normalize_name(slot.opponent))
        elif isinstance(slot, (Empty, Bye)):
            state.available_weeks.append(week)

    state.ooc_remaining = max(0, (team.ooc_needed or 0) - locked_ooc)
    return state


def build_team_states(teams: List[Team]) -> Tuple[List[TeamState], Dict[str, TeamState]]:
    """
    Build a TeamState per team plus a lookup keyed by normalized name.

    Duplicate names collapse in the lookup; the last one wins.
    """
    states = [build_team_state(team) for team in teams]
    by_key = {state.key: state for state in states}
    return states, by_key
