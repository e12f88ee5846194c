"""
Out-of-conference game scheduler.

Fills open weeks with OOC games using a single greedy pass over the weeks.
Each week, the teams with the fewest open weeks are served first and paired
with the scarcest compatible opponent. Placed games are never revisited, so
the result respects every hard constraint but is not guaranteed to schedule
the maximum number of games.
"""

from typing import List, Optional

from ooc_scheduler.models import Team, TeamState, ScheduleResult
from ooc_scheduler.core.config import (
    NUM_WEEKS, MAX_GAMES_PER_TEAM, AVOID_WEEK_0_DEFAULT, NO_PAIRINGS_REASON
)
from ooc_scheduler.core.logging_config import get_logger
from ooc_scheduler.services.state_builder import build_team_states
from ooc_scheduler.services.pairing import can_pair, propose_game, commit_game
from ooc_scheduler.services.byes import assign_byes

logger = get_logger(__name__)


def build_week_order(avoid_week0: bool = AVOID_WEEK_0_DEFAULT) -> List[int]:
    """Weeks in scheduling order; week 0 goes last when it should be avoided."""
    weeks = list(range(NUM_WEEKS))
    if avoid_week0:
        return weeks[1:] + [0]
    return weeks


def _candidate_sort_key(state: TeamState):
    return (len(state.available_weeks), -state.ooc_remaining, state.key)


def schedule_week(states: List[TeamState], week: int) -> int:
    """
    Pair off eligible teams for one week.

    Returns:
        Number of games placed this week
    """
    eligible = [
        s for s in states
        if s.ooc_remaining > 0 and week in s.available_weeks and s.total_games < MAX_GAMES_PER_TEAM
    ]
    eligible.sort(key=lambda s: s.scarcity_key())

    used = set()
    placed = 0
    for team in eligible:
        if team.key in used:
            continue

        candidates = [
            other for other in eligible
            if other is not team
            and other.key not in used
            and week in other.available_weeks
            and can_pair(team, other)
        ]
        if not candidates:
            continue

        opponent = min(candidates, key=_candidate_sort_key)
        placement = propose_game(team, opponent, week)
        commit_game(placement)
        used.add(team.key)
        used.add(opponent.key)
        placed += 1

        logger.debug(
            "Week %d: %s @ %s", week, placement.away.name, placement.home.name
        )

    return placed


def run_matcher(states: List[TeamState], week_order: List[int]) -> int:
    """Run the greedy matcher once over the given week order."""
    total_placed = 0
    for week in week_order:
        total_placed += schedule_week(states, week)
    return total_placed


def generate(teams: List[Team], avoid_week0: bool = AVOID_WEEK_0_DEFAULT) -> ScheduleResult:
    """
    Schedule OOC games for a copy of the given teams.

    Deferring week 0 to the end of the pass is the whole week-0 strategy;
    there is exactly one matcher pass per call. The caller's teams are never
    modified.

    Args:
        teams: Parsed and validated team records
        avoid_week0: Schedule week 0 last instead of first

    Returns:
        ScheduleResult; ok is False only when there was demand and no game
        could be placed at all
    """
    working = [team.copy() for team in teams]
    states, _ = build_team_states(working)

    needed = sum(s.ooc_remaining for s in states)
    week_order = build_week_order(avoid_week0)
    run_matcher(states, week_order)
    remaining = sum(s.ooc_remaining for s in states)
    scheduled = needed - remaining

    if needed > 0 and scheduled == 0:
        logger.warning("No OOC games placed for %d needed", needed)
        return ScheduleResult(
            ok=False,
            reason=NO_PAIRINGS_REASON,
            unscheduled=remaining,
            scheduled_ooc=0,
            needed_ooc=needed
        )

    logger.info("Scheduled %d of %d OOC games (%d unscheduled)", scheduled, needed, remaining)
    return ScheduleResult(
        ok=True,
        unscheduled=remaining,
        scheduled_ooc=scheduled,
        needed_ooc=needed,
        teams=working
    )


class OOCScheduler:
    """
    Runs a full scheduling job: OOC game placement, then bye distribution.
    """

    def __init__(self, teams: List[Team], avoid_week0: bool = AVOID_WEEK_0_DEFAULT):
        """
        Args:
            teams: Parsed and validated team records
            avoid_week0: Schedule week 0 only if still needed after weeks 1-13
        """
        self.teams = teams
        self.avoid_week0 = avoid_week0
        self.result: Optional[ScheduleResult] = None

        logger.info(
            "Scheduler initialized: %d teams, avoid week 0: %s",
            len(self.teams), self.avoid_week0
        )

    def optimize_schedule(self) -> ScheduleResult:
        """
        Generate the schedule and, on success, hand out byes.
        This is the main entry point for schedule generation.
        """
        result = generate(self.teams, self.avoid_week0)
        if result.ok:
            assign_byes(result.teams, self.avoid_week0)
        self.result = result
        logger.info(result.get_summary())
        return result
