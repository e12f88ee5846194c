"""
Bye week distribution for scheduled teams.
"""

from typing import List

from ooc_scheduler.models import Team, Bye, Empty
from ooc_scheduler.core.config import MAX_BYES_PER_TEAM, AVOID_WEEK_0_DEFAULT
from ooc_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


class _ByeView:
    def __init__(self, team: Team):
        self.team = team
        self.byes = []
        self.empties_non0 = []
        self.empties_0 = []
        for week, slot in enumerate(team.weeks):
            if isinstance(slot, Bye):
                self.byes.append(week)
            elif isinstance(slot, Empty):
                if week == 0:
                    self.empties_0.append(week)
                else:
                    self.empties_non0.append(week)

    def next_open_week(self):
        if self.empties_non0:
            return self.empties_non0.pop(0)
        if self.empties_0:
            return self.empties_0.pop(0)
        return None


def assign_byes(teams: List[Team], avoid_week0: bool = AVOID_WEEK_0_DEFAULT) -> int:
    """
    Turn leftover empty weeks into byes, up to MAX_BYES_PER_TEAM per team.

    Byes go out round-robin, one per team per round, so every team reaches
    N byes before any team gets N+1. Week 0 is used only after every other
    empty week is gone; that fallback applies whether or not avoid_week0 is
    set.

    Returns:
        Number of byes added
    """
    views = [_ByeView(team) for team in teams]
    added = 0

    for round_num in range(1, MAX_BYES_PER_TEAM + 1):
        for view in views:
            if len(view.byes) >= round_num or len(view.byes) >= MAX_BYES_PER_TEAM:
                continue
            week = view.next_open_week()
            if week is None:
                continue
            view.team.weeks[week] = Bye()
            view.byes.append(week)
            added += 1

    logger.info("Assigned %d byes across %d teams", added, len(teams))
    return added
