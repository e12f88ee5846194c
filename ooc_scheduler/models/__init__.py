"""
Data models for the scheduling system.
"""

from .models import (
    SlotType,
    ConfHome,
    ConfAway,
    LockedOOC,
    Bye,
    Empty,
    OOCGame,
    WeekSlot,
    GAME_SLOT_TYPES,
    normalize_name,
    Team,
    TeamState,
    GamePlacement,
    ScheduleResult,
    ValidationReport,
    SchedulingConstraint,
    ScheduleValidationResult,
    WeekCount,
    ScheduleStats,
    TeamScheduleStats
)

__all__ = [
    "SlotType",
    "ConfHome",
    "ConfAway",
    "LockedOOC",
    "Bye",
    "Empty",
    "OOCGame",
    "WeekSlot",
    "GAME_SLOT_TYPES",
    "normalize_name",
    "Team",
    "TeamState",
    "GamePlacement",
    "ScheduleResult",
    "ValidationReport",
    "SchedulingConstraint",
    "ScheduleValidationResult",
    "WeekCount",
    "ScheduleStats",
    "TeamScheduleStats"
]
