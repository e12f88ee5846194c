"""
Validation module for the OOC Football Scheduling System.
Checks parsed input before scheduling and generated schedules afterwards.
"""

from typing import List, Dict
from collections import defaultdict

from ooc_scheduler.models import (
    Team, ConfHome, ConfAway, LockedOOC, OOCGame, Bye, Empty,
    GAME_SLOT_TYPES, normalize_name,
    ValidationReport, SchedulingConstraint, ScheduleValidationResult,
    ScheduleStats, WeekCount, TeamScheduleStats
)
from ooc_scheduler.core.config import (
    NUM_WEEKS, MAX_GAMES_PER_TEAM, MAX_BYES_PER_TEAM, HOME_GAMES_TARGET
)
from ooc_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


def validate_teams(teams: List[Team]) -> ValidationReport:
    """
    Check parsed teams for problems the scheduler does not guard against.

    Errors: duplicate names, self play, empty opponent names, more than
    MAX_GAMES_PER_TEAM fixed games, same-conference locked opponents.
    Warnings: locked opponents that are not in the team list.
    """
    report = ValidationReport()
    by_name: Dict[str, Team] = {}

    for team in teams:
        if team.key in by_name:
            report.errors.append(f"Duplicate team name detected: {team.name}")
        else:
            by_name[team.key] = team

    for team in teams:
        if team.ooc_needed < 0:
            report.errors.append(f"{team.name}: OOC games needed cannot be negative ({team.ooc_needed})")
        if len(team.weeks) != NUM_WEEKS:
            report.errors.append(f"{team.name}: expected {NUM_WEEKS} weeks, found {len(team.weeks)}")

        scheduled = 0
        for slot in team.weeks:
            if isinstance(slot, (ConfHome, ConfAway, LockedOOC)):
                scheduled += 1
            if isinstance(slot, LockedOOC):
                if not slot.opponent or not slot.opponent.strip():
                    report.errors.append(f"{team.name}: has an OOC opponent with empty name")
                elif normalize_name(slot.opponent) == team.key:
                    report.errors.append(f"{team.name}: cannot play itself")
        if scheduled > MAX_GAMES_PER_TEAM:
            report.errors.append(
                f"{team.name}: exceeds {MAX_GAMES_PER_TEAM} total scheduled games ({scheduled})"
            )

    for team in teams:
        for slot in team.weeks:
            if not isinstance(slot, LockedOOC) or not slot.opponent.strip():
                continue
            opponent = by_name.get(normalize_name(slot.opponent))
            if opponent is None:
                report.warnings.append(f"{team.name}: opponent '{slot.opponent}' not found in team list")
            elif opponent.conference == team.conference:
                report.errors.append(
                    f"{team.name}: existing OOC opponent {opponent.name} is from same conference ({team.conference})"
                )

    return report


def unscheduled_for_team(team: Team) -> int:
    """OOC games still missing for a team after scheduling."""
    scheduled_ooc = team.count_slots(OOCGame, LockedOOC)
    return max(0, (team.ooc_needed or 0) - scheduled_ooc)


def compute_schedule_stats(teams: List[Team]) -> ScheduleStats:
    """Total games plus the busiest and quietest week."""
    stats = ScheduleStats()
    if not teams:
        return stats

    week_counts = [0] * NUM_WEEKS
    for team in teams:
        for week, slot in enumerate(team.weeks[:NUM_WEEKS]):
            if isinstance(slot, GAME_SLOT_TYPES):
                week_counts[week] += 1

    # Each game appears on both teams' rows
    stats.total_games = sum(week_counts) / 2
    stats.week_counts = week_counts

    most_index = max(range(NUM_WEEKS), key=lambda w: (week_counts[w], -w))
    least_index = min(range(NUM_WEEKS), key=lambda w: (week_counts[w], w))
    stats.week_most = WeekCount(index=most_index, count=week_counts[most_index])
    stats.week_least = WeekCount(index=least_index, count=week_counts[least_index])
    return stats


def team_schedule_stats(team: Team) -> TeamScheduleStats:
    stats = TeamScheduleStats(team=team)
    for slot in team.weeks:
        if isinstance(slot, GAME_SLOT_TYPES):
            stats.total_games += 1
            if isinstance(slot, ConfHome) or (isinstance(slot, (LockedOOC, OOCGame)) and not slot.is_away):
                stats.home_games += 1
            else:
                stats.away_games += 1
        if isinstance(slot, OOCGame):
            stats.ooc_games += 1
        elif isinstance(slot, Bye):
            stats.byes += 1
    stats.unscheduled_ooc = unscheduled_for_team(team)
    return stats


class ScheduleValidator:
    """
    Validates a generated schedule against the input it was built from.
    Hard constraints must hold for every run; soft ones flag imbalance.
    """

    def validate_schedule(self, original: List[Team], scheduled: List[Team]) -> ScheduleValidationResult:
        """
        Args:
            original: Teams as given to the scheduler
            scheduled: Teams returned by the scheduler

        Returns:
            ScheduleValidationResult with all violations found
        """
        result = ScheduleValidationResult(is_valid=True)

        self._check_fixed_slots_preserved(original, scheduled, result)
        self._check_game_cap(scheduled, result)
        self._check_opponents(scheduled, result)
        self._check_symmetry(scheduled, result)
        self._check_bye_limit(original, scheduled, result)
        self._check_home_away_balance(scheduled, result)

        logger.info(
            "Validation: valid=%s hard=%d soft=%d",
            result.is_valid,
            len(result.hard_constraint_violations),
            len(result.soft_constraint_violations)
        )
        for violation in result.hard_constraint_violations[:10]:
            logger.warning("%s: %s", violation.constraint_type, violation.description)

        return result

    def _check_fixed_slots_preserved(self, original: List[Team], scheduled: List[Team],
                                     result: ScheduleValidationResult):
        """Conference and locked games must come out exactly as they went in."""
        scheduled_by_key = {team.key: team for team in scheduled}
        for team in original:
            after = scheduled_by_key.get(team.key)
            if after is None:
                result.add_violation(SchedulingConstraint(
                    constraint_type="missing_team",
                    severity="hard",
                    description=f"{team.name} is missing from the schedule",
                    affected_teams=[team.name]
                ))
                continue
            for week, (before_slot, after_slot) in enumerate(zip(team.weeks, after.weeks)):
                if isinstance(before_slot, (ConfHome, ConfAway, LockedOOC)) and before_slot != after_slot:
                    result.add_violation(SchedulingConstraint(
                        constraint_type="fixed_slot_overwritten",
                        severity="hard",
                        description=f"{team.name} week {week}: {before_slot} became {after_slot}",
                        affected_teams=[team.name],
                        week=week
                    ))
                elif isinstance(before_slot, OOCGame) and before_slot != after_slot:
                    result.add_violation(SchedulingConstraint(
                        constraint_type="ooc_game_overwritten",
                        severity="hard",
                        description=f"{team.name} week {week}: scheduled game changed",
                        affected_teams=[team.name],
                        week=week
                    ))

    def _check_game_cap(self, teams: List[Team], result: ScheduleValidationResult):
        for team in teams:
            games = team.count_slots(*GAME_SLOT_TYPES)
            if games > MAX_GAMES_PER_TEAM:
                result.add_violation(SchedulingConstraint(
                    constraint_type="too_many_games",
                    severity="hard",
                    description=f"{team.name} has {games} games (max {MAX_GAMES_PER_TEAM})",
                    affected_teams=[team.name]
                ))

    def _check_opponents(self, teams: List[Team], result: ScheduleValidationResult):
        """No self play, no same-conference OOC games, no repeat opponents."""
        by_key = {team.key: team for team in teams}
        for team in teams:
            seen = defaultdict(int)
            for week, slot in enumerate(team.weeks):
                if not isinstance(slot, (LockedOOC, OOCGame)):
                    continue
                opponent_key = normalize_name(slot.opponent)
                seen[opponent_key] += 1
                if opponent_key == team.key:
                    result.add_violation(SchedulingConstraint(
                        constraint_type="self_play",
                        severity="hard",
                        description=f"{team.name} plays itself in week {week}",
                        affected_teams=[team.name],
                        week=week
                    ))
                opponent = by_key.get(opponent_key)
                if isinstance(slot, OOCGame) and opponent is not None and opponent.conference == team.conference:
                    result.add_violation(SchedulingConstraint(
                        constraint_type="same_conference_ooc",
                        severity="hard",
                        description=f"{team.name} vs {opponent.name} in week {week} share conference {team.conference}",
                        affected_teams=[team.name, opponent.name],
                        week=week
                    ))
            for opponent_key, count in seen.items():
                if count > 1:
                    result.add_violation(SchedulingConstraint(
                        constraint_type="repeat_opponent",
                        severity="hard",
                        description=f"{team.name} plays {opponent_key} {count} times",
                        affected_teams=[team.name]
                    ))

    def _check_symmetry(self, teams: List[Team], result: ScheduleValidationResult):
        """Every scheduled game must appear on the opponent's row, mirrored."""
        by_key = {team.key: team for team in teams}
        for team in teams:
            for week, slot in enumerate(team.weeks):
                if not isinstance(slot, OOCGame):
                    continue
                opponent = by_key.get(normalize_name(slot.opponent))
                mirrored = opponent.weeks[week] if opponent is not None else None
                if (
                    not isinstance(mirrored, OOCGame)
                    or normalize_name(mirrored.opponent) != team.key
                    or mirrored.is_away == slot.is_away
                ):
                    result.add_violation(SchedulingConstraint(
                        constraint_type="asymmetric_game",
                        severity="hard",
                        description=f"{team.name} week {week} vs {slot.opponent} has no mirrored game",
                        affected_teams=[team.name],
                        week=week
                    ))

    def _check_bye_limit(self, original: List[Team], scheduled: List[Team],
                         result: ScheduleValidationResult):
        original_byes = {team.key: team.count_slots(Bye) for team in original}
        for team in scheduled:
            byes = team.count_slots(Bye)
            if byes > max(MAX_BYES_PER_TEAM, original_byes.get(team.key, 0)):
                result.add_violation(SchedulingConstraint(
                    constraint_type="too_many_byes",
                    severity="hard",
                    description=f"{team.name} has {byes} byes (max {MAX_BYES_PER_TEAM})",
                    affected_teams=[team.name]
                ))

    def _check_home_away_balance(self, teams: List[Team], result: ScheduleValidationResult):
        for team in teams:
            stats = team_schedule_stats(team)
            if stats.total_games >= MAX_GAMES_PER_TEAM and stats.home_games != HOME_GAMES_TARGET:
                result.add_violation(SchedulingConstraint(
                    constraint_type="home_away_imbalance",
                    severity="soft",
                    description=f"{team.name} has {stats.home_games} home / {stats.away_games} away games",
                    affected_teams=[team.name]
                ))

    def generate_schedule_report(self, teams: List[Team]) -> str:
        """Plain-text summary of the schedule, one line per team."""
        stats = compute_schedule_stats(teams)
        lines = [
            "=" * 80,
            "SCHEDULE REPORT",
            "=" * 80,
            f"Teams: {len(teams)}",
            f"Total games: {stats.total_games:g}",
        ]
        if stats.week_most.index is not None:
            lines.append(f"Busiest week: {stats.week_most.index} ({stats.week_most.count} team-games)")
            lines.append(f"Quietest week: {stats.week_least.index} ({stats.week_least.count} team-games)")
        lines.append("")
        lines.append(f"{'Team':<30} {'Conf':<12} {'G':>3} {'H':>3} {'A':>3} {'OOC':>4} {'BYE':>4} {'Left':>5}")
        lines.append("-" * 80)
        for team in teams:
            ts = team_schedule_stats(team)
            lines.append(
                f"{team.name[:30]:<30} {team.conference[:12]:<12} {ts.total_games:>3} "
                f"{ts.home_games:>3} {ts.away_games:>3} {ts.ooc_games:>4} {ts.byes:>4} {ts.unscheduled_ooc:>5}"
            )
        lines.append("=" * 80)
        return "\n".join(lines)
