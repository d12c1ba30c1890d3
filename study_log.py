#!/usr/bin/env python3
"""Study time tracker: log sessions per day, total them by period, and draw a year heat map."""

from __future__ import annotations

import argparse
import calendar
import contextlib
import enum
import json
import logging
import math
import os
import re
import shutil
import sys
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Protocol

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_ENV_VAR: str = "STUDY_LOG_FILE"
STORAGE_DIR: Path = Path.home() / ".study_log"
STORAGE_FILE: Path = STORAGE_DIR / "study_data.json"
JSON_INDENT: int = 2
DATA_ENCODING: str = "utf-8"
BACKUP_SUFFIX: str = ".bak"
MAX_BACKUPS: int = 3

MINUTES_PER_HOUR: int = 60
TIME_UNITS: tuple[str, ...] = ("hours", "minutes")
DEFAULT_TIME_UNIT: str = "hours"
WEEK_DAYS: int = 7

# 53 weeks of 7 days, ending on today.
GRID_WEEKS: int = 53
GRID_DAYS: int = GRID_WEEKS * WEEK_DAYS

# Upper (inclusive) bound of buckets 1..3; anything above the last is bucket 4.
HEATMAP_THRESHOLDS: tuple[float, ...] = (1.0, 2.0, 4.0)
HEATMAP_LEVELS: int = len(HEATMAP_THRESHOLDS) + 2
HEATMAP_DAY_LABELS: tuple[str, ...] = ("Mon", "", "Wed", "", "Fri", "", "Sun")
HEATMAP_CHARS_COLOR: tuple[str, ...] = ("·", "░", "▒", "▓", "█")
HEATMAP_CHARS_PLAIN: tuple[str, ...] = (".", "-", "o", "O", "#")
HEATMAP_LABEL_WIDTH: int = 4

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# ---------------------------------------------------------------------------
# ANSI formatting
# ---------------------------------------------------------------------------

_SUPPORTS_COLOR: bool = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

_ANSI_BOLD: str = "\033[1m"
_ANSI_DIM: str = "\033[2m"
_ANSI_GREEN: str = "\033[32m"
_ANSI_YELLOW: str = "\033[33m"
_ANSI_RESET: str = "\033[0m"


def _bold(text: str) -> str:
    if not _SUPPORTS_COLOR:
        return text
    return f"{_ANSI_BOLD}{text}{_ANSI_RESET}"


def _dim(text: str) -> str:
    if not _SUPPORTS_COLOR:
        return text
    return f"{_ANSI_DIM}{text}{_ANSI_RESET}"


def _green(text: str) -> str:
    if not _SUPPORTS_COLOR:
        return text
    return f"{_ANSI_GREEN}{text}{_ANSI_RESET}"


def _yellow(text: str) -> str:
    if not _SUPPORTS_COLOR:
        return text
    return f"{_ANSI_YELLOW}{text}{_ANSI_RESET}"


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _out(text: str = "") -> None:
    sys.stdout.write(text + "\n")


def _err(text: str) -> None:
    sys.stderr.write(text + "\n")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger: logging.Logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class StudyLogError(Exception):
    """Base class for study log failures."""


class ValidationError(StudyLogError, ValueError):
    """User input was rejected before it reached the store."""


class MalformedSnapshotError(StudyLogError, ValueError):
    """Persisted study data does not have the expected shape."""


# ---------------------------------------------------------------------------
# Domain models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True, slots=True)
class DateKey:
    """A calendar day with no time-of-day or timezone attached.

    Ordering and equality are by (year, month, day). All arithmetic goes
    through `datetime.date`, so month ends and leap days are handled by the
    calendar rather than by counting seconds.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Rejects impossible dates such as Feb 30.
        date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return self.isoformat()

    def __sub__(self, other: DateKey) -> int:
        """Number of days from `other` to `self`."""
        return (self.to_date() - other.to_date()).days

    @staticmethod
    def parse(text: str) -> DateKey:
        """Parse a strict YYYY-MM-DD string.

        Raises:
            ValidationError: If the text is not a real calendar date.
        """
        if not isinstance(text, str) or not _ISO_DATE_RE.match(text):
            raise ValidationError(f"Expected a YYYY-MM-DD date, got {text!r}")
        try:
            return DateKey.from_date(date.fromisoformat(text))
        except ValueError as exc:
            raise ValidationError(f"Not a calendar date: {text!r}") from exc

    @staticmethod
    def from_date(value: date) -> DateKey:
        return DateKey(value.year, value.month, value.day)

    @staticmethod
    def today() -> DateKey:
        return DateKey.from_date(date.today())

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def add_days(self, days: int) -> DateKey:
        return DateKey.from_date(self.to_date() + timedelta(days=days))

    def weekday(self) -> int:
        """Monday is 0, Sunday is 6."""
        return self.to_date().weekday()


def _is_valid_duration(value: object) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value) and value > 0
    except OverflowError:
        # int too large to convert to float
        return False


@dataclass(frozen=True, slots=True)
class Session:
    """One logged block of study time."""

    duration_hours: float
    note: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize to the persisted `{time, description?}` shape."""
        data: dict[str, object] = {"time": self.duration_hours}
        if self.note is not None:
            data["description"] = self.note
        return data

    @staticmethod
    def from_dict(data: object) -> Session:
        """Deserialize one persisted entry.

        Raises:
            MalformedSnapshotError: If the entry is not a `{time, description?}` object.
        """
        if not isinstance(data, dict):
            raise MalformedSnapshotError(
                f"Session entry must be an object, got {type(data).__name__}"
            )
        time_raw = data.get("time")
        if not _is_valid_duration(time_raw):
            raise MalformedSnapshotError(
                f"Session time must be a positive number, got {time_raw!r}"
            )
        note = data.get("description")
        if note is not None and not isinstance(note, str):
            raise MalformedSnapshotError(
                f"Session description must be a string, got {type(note).__name__}"
            )
        return Session(duration_hours=float(time_raw), note=note)


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------


class Persistence(Protocol):
    """Where snapshots go: read once at startup, written after each change."""

    def load(self) -> object | None: ...

    def save(self, snapshot: dict[str, list[dict[str, object]]]) -> None: ...


def _parse_snapshot(snapshot: object) -> dict[DateKey, list[Session]]:
    if not isinstance(snapshot, dict):
        raise MalformedSnapshotError(
            f"Snapshot root must be an object, got {type(snapshot).__name__}"
        )

    parsed: dict[DateKey, list[Session]] = {}
    for key, entries in snapshot.items():
        try:
            day = DateKey.parse(key)
        except ValidationError as exc:
            raise MalformedSnapshotError(str(exc)) from exc
        if not isinstance(entries, list):
            raise MalformedSnapshotError(
                f"Sessions for {key} must be a list, got {type(entries).__name__}"
            )
        sessions = [Session.from_dict(entry) for entry in entries]
        if sessions:
            parsed[day] = sessions
    return parsed


class SessionStore:
    """Sessions grouped by calendar day, oldest first within each day.

    A day is only present while it holds at least one session. The store
    does no I/O of its own: it is handed a snapshot to `load` and, when a
    persistence port is injected, passes a fresh `snapshot()` to its `save`
    after every `add_session`.
    """

    def __init__(self, persistence: Persistence | None = None) -> None:
        self._persistence = persistence
        self._sessions: dict[DateKey, list[Session]] = {}

    @classmethod
    def open(cls, persistence: Persistence) -> SessionStore:
        """Build a store from the port's saved snapshot.

        Malformed data is logged and replaced by an empty store.
        """
        store = cls(persistence)
        try:
            store.load(persistence.load())
        except MalformedSnapshotError as exc:
            logger.warning("Ignoring malformed study data: %s", exc)
        return store

    def __len__(self) -> int:
        return len(self._sessions)

    def add_session(self, day: DateKey, session: Session) -> None:
        """Append a session to `day` and hand the new snapshot to persistence."""
        if not _is_valid_duration(session.duration_hours):
            raise ValidationError(
                f"Duration must be a positive number of hours, got {session.duration_hours!r}"
            )
        self._sessions.setdefault(day, []).append(session)
        logger.debug("Added %.4f hours on %s", session.duration_hours, day)
        if self._persistence is not None:
            self._persistence.save(self.snapshot())

    def sessions_on(self, day: DateKey) -> list[Session]:
        return list(self._sessions.get(day, []))

    def dates(self) -> list[DateKey]:
        return sorted(self._sessions)

    def session_count(self) -> int:
        return sum(len(sessions) for sessions in self._sessions.values())

    def sum_range(self, start: DateKey, end: DateKey) -> float:
        """Total hours logged on days in [start, end].

        An inverted range is empty and sums to 0.
        """
        if start > end:
            return 0.0
        total = 0.0
        for day, sessions in self._sessions.items():
            if start <= day <= end:
                total += sum(s.duration_hours for s in sessions)
        return total

    def daily_totals(self) -> dict[DateKey, float]:
        """Hours per stored day, computed in one pass."""
        return {
            day: sum(s.duration_hours for s in sessions)
            for day, sessions in self._sessions.items()
        }

    def snapshot(self) -> dict[str, list[dict[str, object]]]:
        """Serialize to `{"YYYY-MM-DD": [{"time": ..., "description": ...}]}`."""
        return {
            day.isoformat(): [s.to_dict() for s in sessions]
            for day, sessions in sorted(self._sessions.items())
        }

    def load(self, snapshot: object | None) -> None:
        """Replace the whole store with `snapshot`; None means empty.

        Raises:
            MalformedSnapshotError: If the snapshot has the wrong shape. The
                store keeps its previous contents.
        """
        parsed = {} if snapshot is None else _parse_snapshot(snapshot)
        self._sessions = parsed
        logger.debug("Loaded %d day(s) of study data", len(parsed))


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


def parse_duration(raw: str | float, unit: str = DEFAULT_TIME_UNIT) -> float:
    """Convert user-entered time in `unit` to hours.

    Raises:
        ValidationError: For unknown units and non-numeric, non-finite or
            non-positive values.
    """
    if unit not in TIME_UNITS:
        raise ValidationError(f"Unit must be one of {', '.join(TIME_UNITS)}, got {unit!r}")
    if isinstance(raw, bool):
        raise ValidationError(f"Duration must be a number, got {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Duration must be a number, got {raw!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"Duration must be greater than zero, got {raw!r}")
    if unit == "minutes":
        return value / MINUTES_PER_HOUR
    return value


def new_session(
    raw: str | float,
    unit: str = DEFAULT_TIME_UNIT,
    note: str | None = None,
) -> Session:
    """Build a validated Session; a blank note is stored as no note."""
    hours = parse_duration(raw, unit)
    cleaned = note.strip() if note else ""
    try:
        cleaned.encode(DATA_ENCODING)
    except UnicodeEncodeError as exc:
        raise ValidationError(f"Description is not valid {DATA_ENCODING} text") from exc
    return Session(duration_hours=hours, note=cleaned or None)


# ---------------------------------------------------------------------------
# Period totals
# ---------------------------------------------------------------------------


class Period(enum.Enum):
    """Calendar period a total is computed over."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def period_bounds(period: Period | str, reference: DateKey) -> tuple[DateKey, DateKey]:
    """Inclusive first and last day of the period containing `reference`.

    Weeks run Monday through Sunday.
    """
    period = Period(period)
    if period is Period.DAY:
        return reference, reference
    if period is Period.WEEK:
        monday = reference.add_days(-reference.weekday())
        return monday, monday.add_days(WEEK_DAYS - 1)
    if period is Period.MONTH:
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return (
            DateKey(reference.year, reference.month, 1),
            DateKey(reference.year, reference.month, last_day),
        )
    return DateKey(reference.year, 1, 1), DateKey(reference.year, 12, 31)


def total_for_period(store: SessionStore, period: Period | str, reference: DateKey) -> float:
    start, end = period_bounds(period, reference)
    return store.sum_range(start, end)


# ---------------------------------------------------------------------------
# Activity heatmap
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HeatMapCell:
    """One day of the heat map."""

    date: DateKey
    total_hours: float
    bucket: int

    @property
    def tooltip(self) -> str:
        return f"{self.date.isoformat()}: {self.total_hours:.2f} hours"


def bucket_for(total_hours: float) -> int:
    """Map a day's total to an intensity level from 0 to 4.

    0 hours is level 0; (0, 1] is 1; (1, 2] is 2; (2, 4] is 3; above 4 is 4.
    """
    if total_hours <= 0:
        return 0
    for level, ceiling in enumerate(HEATMAP_THRESHOLDS, start=1):
        if total_hours <= ceiling:
            return level
    return HEATMAP_LEVELS - 1


def build_grid(store: SessionStore, today: DateKey) -> list[HeatMapCell]:
    """Build the GRID_DAYS cells ending on `today`, oldest first.

    The grid covers [today - 370, today]: the trailing year plus the six
    days before it, so it always fills 53 week columns. Totals come from a
    single pass over the stored days rather than one range sum per cell.
    """
    totals = store.daily_totals()
    start = today.add_days(-(GRID_DAYS - 1))

    cells: list[HeatMapCell] = []
    for offset in range(GRID_DAYS):
        day = start.add_days(offset)
        total = totals.get(day, 0.0)
        cells.append(HeatMapCell(date=day, total_hours=total, bucket=bucket_for(total)))
    return cells


def _intensity_char(bucket: int, chars: tuple[str, ...]) -> str:
    """Map a bucket to a display character with optional color."""
    char = chars[bucket]
    if not _SUPPORTS_COLOR or bucket == 0:
        return char
    color_fns = (_dim, _yellow, _green, lambda text: _bold(_green(text)))
    return color_fns[bucket - 1](char)


def _render_heatmap(cells: list[HeatMapCell]) -> list[str]:
    """Lay the cells out as 7 weekday rows by week columns, with month labels."""
    chars = HEATMAP_CHARS_COLOR if _SUPPORTS_COLOR else HEATMAP_CHARS_PLAIN
    first_monday = cells[0].date.add_days(-cells[0].date.weekday())
    week_count = (cells[-1].date - first_monday) // WEEK_DAYS + 1

    rows: list[list[str]] = [[" "] * week_count for _ in range(WEEK_DAYS)]
    for cell in cells:
        week_idx = (cell.date - first_monday) // WEEK_DAYS
        rows[cell.date.weekday()][week_idx] = _intensity_char(cell.bucket, chars)

    month_row: list[str] = [" "] * (week_count * 2)
    prev_month = -1
    next_free = 0
    for week_idx in range(week_count):
        week_monday = first_monday.add_days(week_idx * WEEK_DAYS)
        if week_monday.month == prev_month:
            continue
        prev_month = week_monday.month
        label = calendar.month_abbr[week_monday.month]
        pos = week_idx * 2
        if pos >= next_free:
            month_row[pos : pos + len(label)] = list(label)
            next_free = pos + len(label) + 1

    lines: list[str] = [(" " * HEATMAP_LABEL_WIDTH + "".join(month_row)).rstrip()]
    for day_idx in range(WEEK_DAYS):
        label = HEATMAP_DAY_LABELS[day_idx].ljust(HEATMAP_LABEL_WIDTH)
        lines.append((label + " ".join(rows[day_idx])).rstrip())
    return lines


def _render_heatmap_legend() -> str:
    chars = HEATMAP_CHARS_COLOR if _SUPPORTS_COLOR else HEATMAP_CHARS_PLAIN
    parts = [_intensity_char(level, chars) for level in range(HEATMAP_LEVELS)]
    return f"  Less {' '.join(parts)} More"


# ---------------------------------------------------------------------------
# Display formatting
# ---------------------------------------------------------------------------


def format_hours(total_hours: float) -> str:
    """Format a total as minutes under one hour, else hours to 2 decimals."""
    if total_hours < 1:
        minutes = math.floor(total_hours * MINUTES_PER_HOUR + 0.5)
        return f"{minutes} minutes"
    return f"{total_hours:.2f} hours"


def format_long_date(day: DateKey) -> str:
    return f"{calendar.month_abbr[day.month]} {day.day}, {day.year}"


# ---------------------------------------------------------------------------
# Persistence layer
# ---------------------------------------------------------------------------


class JsonFileStore:
    """Snapshot persistence in a JSON file with rotated backups."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _backup_path(self, generation: int) -> Path:
        return self.path.parent / f"{self.path.name}{BACKUP_SUFFIX}{generation}"

    def _write_atomic_json(self, data: dict[str, object]) -> None:
        """Write JSON data atomically using tempfile + fsync + replace."""
        serialized = json.dumps(data, indent=JSON_INDENT, ensure_ascii=False)
        fd, tmp_path_str = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        tmp_path = Path(tmp_path_str)
        try:
            with os.fdopen(fd, "w", encoding=DATA_ENCODING) as f:
                f.write(serialized)
                f.flush()
                os.fsync(f.fileno())
            tmp_path.replace(self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise

    def _rotate_backups(self) -> None:
        for gen in range(MAX_BACKUPS - 1, 0, -1):
            src = self._backup_path(gen)
            dst = self._backup_path(gen + 1)
            if src.exists():
                shutil.move(str(src), dst)
        if self.path.exists():
            shutil.copy2(self.path, self._backup_path(1))

    def save(self, snapshot: dict[str, list[dict[str, object]]]) -> None:
        """Persist the snapshot with backup rotation and atomic write."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._rotate_backups()
        self._write_atomic_json(snapshot)
        logger.debug("Saved study data to %s", self.path)

    def load(self) -> object | None:
        """Read the saved snapshot, falling back through backups on corruption.

        A candidate that is not valid JSON, or whose contents are not a
        well-formed snapshot, is skipped. Returns None when nothing has been
        saved yet.

        Raises:
            MalformedSnapshotError: If files exist but none of them parse.
        """
        candidates = [self.path, *[self._backup_path(g) for g in range(1, MAX_BACKUPS + 1)]]

        found = False
        for candidate in candidates:
            if not candidate.exists():
                continue
            found = True
            try:
                data = json.loads(candidate.read_text(encoding=DATA_ENCODING))
                _parse_snapshot(data)
            except (ValueError, OSError):
                logger.warning("Corrupt or unreadable: %s", candidate)
                if candidate == self.path:
                    corrupted = self.path.parent / f"{self.path.name}.corrupted"
                    with contextlib.suppress(OSError):
                        shutil.copy2(candidate, corrupted)
                continue
            if candidate != self.path:
                logger.warning("Recovered from backup: %s", candidate)
            logger.debug("Loaded study data from %s", candidate)
            return data

        if found:
            raise MalformedSnapshotError(f"No readable study data in {self.path} or its backups")
        return None


def _data_path() -> Path:
    """Returns the resolved path to the study data file."""
    override = os.environ.get(_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return STORAGE_FILE


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

_PERIOD_LABELS: dict[Period, str] = {
    Period.DAY: "today",
    Period.WEEK: "this week",
    Period.MONTH: "this month",
    Period.YEAR: "this year",
}


def _cmd_add(store: SessionStore, args: argparse.Namespace) -> int:
    try:
        session = new_session(args.time, unit=args.unit, note=args.note)
    except ValidationError as exc:
        _err(f"  Error: {exc}")
        return 1

    day: DateKey = args.date or DateKey.today()
    store.add_session(day, session)

    _out()
    _out(
        f"  {_green('✔')} Logged {format_hours(session.duration_hours)}"
        f" on {format_long_date(day)}"
    )
    _out(f"  {_dim('Day total:')} {format_hours(store.sum_range(day, day))}")
    _out()
    return 0


def _cmd_day(store: SessionStore, args: argparse.Namespace) -> int:
    day: DateKey = args.date or DateKey.today()
    sessions = store.sessions_on(day)

    _out()
    _out(f"  {_bold(format_long_date(day))}")
    _out()
    if not sessions:
        _out("  No study sessions recorded for this date.")
        _out()
        return 0

    for number, session in enumerate(sessions, start=1):
        line = f"    Session {number}: {format_hours(session.duration_hours):>14s}"
        if session.note:
            line += f"  {session.note}"
        _out(line)
    _out()
    _out(f"  Total: {format_hours(store.sum_range(day, day))}")
    _out()
    return 0


def _cmd_stats(store: SessionStore, args: argparse.Namespace) -> int:
    reference: DateKey = args.date or DateKey.today()
    periods = [Period(args.period)] if args.period else list(Period)

    _out()
    _out(f"  {_bold('Study Statistics')}")
    _out()
    for period in periods:
        total = total_for_period(store, period, reference)
        label = f"Total study time {_PERIOD_LABELS[period]}:"
        _out(f"  {label:<33s} {format_hours(total)}")
    _out()
    return 0


def _cmd_heatmap(store: SessionStore, args: argparse.Namespace) -> int:
    today: DateKey = args.date or DateKey.today()
    cells = build_grid(store, today)

    _out()
    _out(f"  {_bold('Study Heat Map')}")
    _out()
    for line in _render_heatmap(cells):
        _out(f"  {line}")
    _out()
    _out(_render_heatmap_legend())
    _out()
    return 0


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def _date_arg(value: str) -> DateKey:
    """Argparse type for YYYY-MM-DD dates."""
    try:
        return DateKey.parse(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="study-log",
        description="Log study sessions and see how the hours add up.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    add_parser = sub.add_parser("add", help="log a study session")
    add_parser.add_argument("time", help="time spent studying")
    add_parser.add_argument(
        "--unit",
        choices=TIME_UNITS,
        default=DEFAULT_TIME_UNIT,
        help=f"unit of TIME (default: {DEFAULT_TIME_UNIT})",
    )
    add_parser.add_argument("-d", "--description", dest="note", help="what you studied")
    add_parser.add_argument("--date", type=_date_arg, help="session date (default: today)")

    day_parser = sub.add_parser("day", help="list the sessions on a date")
    day_parser.add_argument("--date", type=_date_arg, help="date to show (default: today)")

    stats_parser = sub.add_parser("stats", help="show totals by period")
    stats_parser.add_argument(
        "--period",
        choices=[p.value for p in Period],
        help="only show this period",
    )
    stats_parser.add_argument("--date", type=_date_arg, help="reference date (default: today)")

    heatmap_parser = sub.add_parser("heatmap", help="show the year heat map")
    heatmap_parser.add_argument("--date", type=_date_arg, help="last day shown (default: today)")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_COMMANDS = {
    "add": _cmd_add,
    "day": _cmd_day,
    "stats": _cmd_stats,
    "heatmap": _cmd_heatmap,
}


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    store = SessionStore.open(JsonFileStore(_data_path()))
    return _COMMANDS[args.command](store, args)


if __name__ == "__main__":
    raise SystemExit(main())
