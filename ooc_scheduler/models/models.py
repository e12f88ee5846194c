"""
Data models for the OOC Football Scheduling System.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Dict, Union
from enum import Enum


class SlotType(Enum):
    CONF_HOME = "confHome"
    CONF_AWAY = "confAway"
    LOCKED_OOC = "lockedOOC"
    BYE = "bye"
    EMPTY = "empty"
    OOC_GAME = "oocGame"


@dataclass(frozen=True)
class ConfHome:
    type = SlotType.CONF_HOME


@dataclass(frozen=True)
class ConfAway:
    type = SlotType.CONF_AWAY


@dataclass(frozen=True)
class LockedOOC:
    """Pre-existing out-of-conference game carried over from the input."""
    opponent: str
    is_away: bool = False
    type = SlotType.LOCKED_OOC


@dataclass(frozen=True)
class Bye:
    type = SlotType.BYE


@dataclass(frozen=True)
class Empty:
    type = SlotType.EMPTY


@dataclass(frozen=True)
class OOCGame:
    """Out-of-conference game placed by the scheduler."""
    opponent: str
    is_away: bool = False
    type = SlotType.OOC_GAME


WeekSlot = Union[ConfHome, ConfAway, LockedOOC, Bye, Empty, OOCGame]

# Slots that count as a played game
GAME_SLOT_TYPES = (ConfHome, ConfAway, LockedOOC, OOCGame)


def normalize_name(name: str) -> str:
    """Lookup key for a team name (trimmed, lower-cased)."""
    return (name or "").strip().lower()


@dataclass
class Team:
    name: str
    conference: str
    ooc_needed: int = 0
    weeks: List[WeekSlot] = field(default_factory=list)

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    def copy(self) -> 'Team':
        # Slots are immutable, so a fresh list is a deep copy
        return Team(
            name=self.name,
            conference=self.conference,
            ooc_needed=self.ooc_needed,
            weeks=list(self.weeks)
        )

    def count_slots(self, *slot_classes) -> int:
        return sum(1 for slot in self.weeks if isinstance(slot, slot_classes))

    def __str__(self):
        return f"{self.name} ({self.conference})"


@dataclass
class TeamState:
    """
    Mutable scheduling view of a single team, owned by one scheduling run.
    """
    team: Team
    key: str
    conference: str
    total_games: int = 0
    home_games: int = 0
    away_games: int = 0
    played_opponents: Set[str] = field(default_factory=set)
    available_weeks: List[int] = field(default_factory=list)
    ooc_remaining: int = 0

    @property
    def name(self) -> str:
        return self.team.name

    def scarcity_key(self):
        """Fewer open weeks first, then teams needing more games."""
        return (len(self.available_weeks), -self.ooc_remaining)


@dataclass
class GamePlacement:
    """A proposed OOC game between two states, not yet written."""
    home: TeamState
    away: TeamState
    week: int


@dataclass
class ScheduleResult:
    ok: bool
    reason: Optional[str] = None
    unscheduled: int = 0
    scheduled_ooc: int = 0
    needed_ooc: int = 0
    teams: Optional[List[Team]] = None

    @property
    def is_partial(self) -> bool:
        return self.ok and self.unscheduled > 0

    def get_summary(self) -> str:
        if not self.ok:
            return f"Failed to generate schedule: {self.reason}"
        if self.unscheduled > 0:
            return (
                f"Scheduled {self.scheduled_ooc} of {self.needed_ooc} OOC games. "
                f"{self.unscheduled} remain unscheduled."
            )
        return "Successfully generated schedule."

    def to_dict(self) -> Dict:
        return {
            "ok": self.ok,
            "reason": self.reason,
            "unscheduled": self.unscheduled,
            "scheduled_ooc": self.scheduled_ooc,
            "needed_ooc": self.needed_ooc
        }


@dataclass
class ValidationReport:
    """Outcome of checking parsed input before scheduling."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class SchedulingConstraint:
    constraint_type: str
    severity: str
    description: str
    affected_teams: List[str] = field(default_factory=list)
    week: Optional[int] = None


@dataclass
class ScheduleValidationResult:
    is_valid: bool
    hard_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)
    soft_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)

    def add_violation(self, constraint: SchedulingConstraint):
        if constraint.severity == 'hard':
            self.hard_constraint_violations.append(constraint)
            self.is_valid = False
        else:
            self.soft_constraint_violations.append(constraint)

    def get_summary(self) -> str:
        summary = f"Schedule Valid: {self.is_valid}\n"
        summary += f"Hard Violations: {len(self.hard_constraint_violations)}\n"
        summary += f"Soft Violations: {len(self.soft_constraint_violations)}\n"
        return summary


@dataclass
class WeekCount:
    index: Optional[int] = None
    count: int = 0


@dataclass
class ScheduleStats:
    total_games: float = 0
    week_most: WeekCount = field(default_factory=WeekCount)
    week_least: WeekCount = field(default_factory=WeekCount)
    week_counts: List[int] = field(default_factory=list)


@dataclass
class TeamScheduleStats:
    team: Team
    total_games: int = 0
    home_games: int = 0
    away_games: int = 0
    byes: int = 0
    ooc_games: int = 0
    unscheduled_ooc: int = 0

    def calculate_balance_score(self) -> float:
        if self.total_games == 0:
            return 0.0
        ideal_split = self.total_games / 2.0
        return abs(self.home_games - ideal_split) + abs(self.away_games - ideal_split)
