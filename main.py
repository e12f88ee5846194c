"""
Main entry point for the OOC Football Scheduling System (CLI).
Orchestrates the complete scheduling workflow.
"""

import sys
import argparse
import logging
from datetime import datetime
from pathlib import Path

from ooc_scheduler.core.logging_config import setup_logging
from ooc_scheduler.services.csv_codec import load_teams_csv, write_teams_csv, scheduled_filename
from ooc_scheduler.services.scheduler import OOCScheduler
from ooc_scheduler.services.validator import ScheduleValidator, validate_teams


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='OOC Football Scheduling System - Fill open weeks with out-of-conference games'
    )
    parser.add_argument(
        'input',
        nargs='?',
        help='Team grid CSV (name, conference, OOC needed, weeks 0-13)'
    )
    parser.add_argument(
        '--allow-week0',
        action='store_true',
        help='Schedule week 0 like any other week instead of last'
    )
    parser.add_argument(
        '--output',
        help='Output CSV path (default: <input>-scheduled.csv)'
    )
    parser.add_argument(
        '--from-sheet',
        action='store_true',
        help='Read the team grid from Google Sheets instead of a CSV file'
    )
    parser.add_argument(
        '--write-sheet',
        action='store_true',
        help='Also write the scheduled grid to Google Sheets'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    return parser


def main(argv=None):
    """
    Load teams, schedule OOC games, validate, report and write the result.
    """
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    print("\n" + "=" * 80)
    print("OOC FOOTBALL SCHEDULING SYSTEM")
    print("=" * 80)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)

    try:
        # Step 1: Load teams
        print("\n[STEP 1] Loading teams...")
        if args.from_sheet:
            from ooc_scheduler.services.sheets_reader import SheetsReader
            teams = SheetsReader().load_teams()
            source_name = None
        elif args.input:
            teams = load_teams_csv(args.input)
            source_name = Path(args.input).name
        else:
            print("ERROR: Provide a CSV file or --from-sheet.")
            return 1

        report = validate_teams(teams)
        if not report.is_valid:
            print(f"ERROR: {report.errors[0]}")
            return 1
        for warning in report.warnings:
            print(f"  WARNING: {warning}")
        print(f"Loaded {len(teams)} teams with {len(report.warnings)} warning(s)")

        # Step 2: Schedule
        print("\n[STEP 2] Generating schedule...")
        result = OOCScheduler(teams, avoid_week0=not args.allow_week0).optimize_schedule()
        print(result.get_summary())
        if not result.ok:
            return 1

        # Step 3: Validate
        print("\n[STEP 3] Validating schedule...")
        validator = ScheduleValidator()
        validation_result = validator.validate_schedule(teams, result.teams)
        print(validation_result.get_summary())
        if not validation_result.is_valid:
            for violation in validation_result.hard_constraint_violations[:10]:
                print(f"  - {violation.constraint_type}: {violation.description}")

        # Step 4: Report
        print("\n[STEP 4] Generating schedule report...")
        print("\n" + validator.generate_schedule_report(result.teams))

        # Step 5: Write
        output = args.output
        if output is None:
            output_dir = Path(args.input).parent if args.input else Path('.')
            output = output_dir / scheduled_filename(source_name)
        print(f"\n[STEP 5] Writing {output}...")
        write_teams_csv(result.teams, output)

        if args.write_sheet:
            from ooc_scheduler.services.sheets_writer import SheetsWriter
            SheetsWriter().write_schedule(result.teams)
            print("Schedule written to Google Sheets")

        print("\n" + "=" * 80)
        print("SCHEDULING COMPLETE")
        print("=" * 80)
        print(f"OOC games scheduled: {result.scheduled_ooc} of {result.needed_ooc}")
        print(f"Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print("=" * 80)

        return 0

    except KeyboardInterrupt:
        print("\n\nScheduling interrupted by user.")
        return 1

    except ValueError as e:
        print(f"\nERROR: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
