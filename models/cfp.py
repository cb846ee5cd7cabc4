from __future__ import annotations

import typing
from collections import namedtuple
from collections.abc import Iterable
from datetime import date

from sqlalchemy import ForeignKey, UniqueConstraint, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.orm.attributes import get_history

from . import BaseModel, local_today, no_autoflush

if typing.TYPE_CHECKING:
    from .conference import Conference, EmailSettings, Program

__all__ = [
    "Cfp",
    "CfpDates",
    "ValidationResult",
    "TYPES",
    "validate",
    "for_type",
    "for_events",
    "for_tracks",
    "for_booths",
    "notify_on_cfp_date_update",
    "is_open",
    "remaining_days",
    "weeks",
]

# Each program can run one call of each type
TYPES = ("events", "booths", "tracks")

HUMAN_CFP_TYPES: dict[str, str] = {
    "events": "call for events",
    "booths": "call for booths",
    "tracks": "call for tracks",
}

CfpDates = namedtuple("CfpDates", "start_date end_date")


class ValidationResult:
    """The outcome of validating a Cfp.

    Truthy when valid. Otherwise `errors` holds (field, reason) pairs in the
    order the rules were checked.
    """

    def __init__(self, errors=None):
        self.errors: list[tuple[str, str]] = list(errors or [])

    def add(self, field, reason):
        self.errors.append((field, reason))

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self):
        return self.valid

    def errors_for(self, field) -> list[str]:
        return [reason for f, reason in self.errors if f == field]

    def as_dict(self) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}
        for field, reason in self.errors:
            errors.setdefault(field, []).append(reason)
        return errors

    def __repr__(self):
        if self.valid:
            return "<ValidationResult valid>"
        return f"<ValidationResult invalid {self.errors!r}>"


def validate(cfp: Cfp, program: Program | None = None) -> ValidationResult:
    with no_autoflush(cfp):
        return _validate(cfp, program)


def _validate(cfp: Cfp, program: Program | None) -> ValidationResult:
    if program is None:
        program = cfp.program

    result = ValidationResult()

    if not cfp.cfp_type:
        result.add("cfp_type", "can't be blank")
    elif cfp.cfp_type not in TYPES:
        result.add("cfp_type", f'"{cfp.cfp_type}" is not one of {", ".join(TYPES)}')
    elif program is not None:
        for other in program.cfps:
            if other is cfp or (cfp.id is not None and other.id == cfp.id):
                continue
            if other.cfp_type and other.cfp_type.lower() == cfp.cfp_type.lower():
                result.add("cfp_type", "has already been taken")
                break

    if cfp.start_date is None:
        result.add("start_date", "can't be blank")
    if cfp.end_date is None:
        result.add("end_date", "can't be blank")

    if program is None:
        result.add("program", "can't be blank")
        return result

    conference_end = program.conference.end_date if program.conference else None
    if conference_end is not None:
        if cfp.end_date is not None and cfp.end_date > conference_end:
            result.add("end_date", f"can't be after the conference end date ({conference_end})")
        if cfp.start_date is not None and cfp.start_date > conference_end:
            result.add("start_date", f"can't be after the conference end date ({conference_end})")

    # Start must be strictly before end: a window can't open and close on the same day
    if cfp.start_date is not None and cfp.end_date is not None and cfp.start_date >= cfp.end_date:
        result.add("start_date", "must be before the end date")

    return result


def for_type(cfps: Iterable[Cfp], cfp_type: str) -> Cfp | None:
    for cfp in cfps:
        if cfp.cfp_type == cfp_type:
            return cfp
    return None


def for_events(cfps: Iterable[Cfp]) -> Cfp | None:
    return for_type(cfps, "events")


def for_tracks(cfps: Iterable[Cfp]) -> Cfp | None:
    return for_type(cfps, "tracks")


def for_booths(cfps: Iterable[Cfp]) -> Cfp | None:
    return for_type(cfps, "booths")


def notify_on_cfp_date_update(
    previous: CfpDates | None, proposed: CfpDates, email_settings: EmailSettings | None
) -> bool:
    """Should saving `proposed` over `previous` send the "dates updated" email?"""
    if previous is None or email_settings is None:
        return False

    dates_changed = (
        previous.start_date != proposed.start_date or previous.end_date != proposed.end_date
    )
    return bool(
        dates_changed
        and email_settings.send_on_cfp_dates_updated
        and email_settings.cfp_dates_updated_subject
        and email_settings.cfp_dates_updated_body
    )


def is_open(cfp: Cfp, conference: Conference | None = None, clock=None) -> bool:
    """Is the call open today, where "today" is the day in the conference's timezone?

    `clock` returns the current (aware) instant and defaults to the system clock.
    """
    if conference is None:
        conference = cfp.conference
    if conference is None or cfp.start_date is None or cfp.end_date is None:
        return False

    conference_day = local_today(conference.timezone, clock)
    return cfp.start_date <= conference_day <= cfp.end_date


def remaining_days(cfp: Cfp, today: date | None = None, clock=None) -> int:
    if today is None:
        today = local_today(cfp.conference.timezone, clock)
    return (cfp.end_date - today).days


def weeks(cfp: Cfp) -> int:
    """Number of calendar weeks (starting Monday) the call touches."""
    start_year, start_week, _ = cfp.start_date.isocalendar()
    start_monday = date.fromisocalendar(start_year, start_week, 1)
    end_year, end_week, _ = cfp.end_date.isocalendar()
    end_monday = date.fromisocalendar(end_year, end_week, 1)
    return (end_monday - start_monday).days // 7 + 1


class Cfp(BaseModel):
    __tablename__ = "cfp"
    # Types are stored lowercase, so this also holds ignoring case
    __table_args__ = (UniqueConstraint("program_id", "cfp_type"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    program_id: Mapped[int] = mapped_column(ForeignKey("program.id"))
    cfp_type: Mapped[str] = mapped_column()
    description: Mapped[str | None] = mapped_column()

    # active_history so we still know the old dates after the object has been expired
    start_date: Mapped[date] = mapped_column(active_history=True)
    end_date: Mapped[date] = mapped_column(active_history=True)

    program: Mapped[Program] = relationship(back_populates="cfps")

    @property
    def conference(self) -> Conference | None:
        if self.program is None:
            return None
        return self.program.conference

    @property
    def human_type(self) -> str:
        return HUMAN_CFP_TYPES.get(self.cfp_type, self.cfp_type)

    @property
    def dates(self) -> CfpDates:
        return CfpDates(self.start_date, self.end_date)

    def _persisted_value(self, attr):
        hist = get_history(self, attr)
        if hist.deleted:
            return hist.deleted[0]
        if hist.unchanged:
            return hist.unchanged[0]
        return None

    def persisted_dates(self) -> CfpDates | None:
        """The dates as they were last loaded from or written to the database.

        Returns None for a Cfp which has never been saved.
        """
        if not inspect(self).has_identity:
            return None
        with no_autoflush(self):
            return CfpDates(self._persisted_value("start_date"), self._persisted_value("end_date"))

    def start_date_changed(self) -> bool:
        previous = self.persisted_dates()
        return previous is not None and previous.start_date != self.start_date

    def end_date_changed(self) -> bool:
        previous = self.persisted_dates()
        return previous is not None and previous.end_date != self.end_date

    def notify_on_cfp_date_update(self) -> bool:
        previous = self.persisted_dates()
        with no_autoflush(self):
            conference = self.conference
            email_settings = conference.email_settings if conference else None
        return notify_on_cfp_date_update(previous, self.dates, email_settings)

    def open(self, clock=None) -> bool:
        return is_open(self, clock=clock)

    def remaining_days(self, today=None) -> int:
        return remaining_days(self, today)

    @property
    def weeks(self) -> int:
        return weeks(self)

    def validate(self, program=None) -> ValidationResult:
        return validate(self, program)

    def __repr__(self):
        return f"<Cfp {self.cfp_type} {self.start_date} - {self.end_date} (id: {self.id})>"
