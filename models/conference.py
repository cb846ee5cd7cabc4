from __future__ import annotations

from datetime import date

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from main import db
from . import BaseModel
from .cfp import Cfp, for_booths, for_events, for_tracks
from .exc import CfpNotFound, ConferenceNotFound

__all__ = ["Conference", "Program", "EmailSettings"]


class Conference(BaseModel):
    __tablename__ = "conference"

    id: Mapped[int] = mapped_column(primary_key=True)
    short_title: Mapped[str] = mapped_column(unique=True)
    title: Mapped[str] = mapped_column()
    start_date: Mapped[date] = mapped_column()
    end_date: Mapped[date] = mapped_column()
    # IANA zone name, e.g. "Europe/London"
    timezone: Mapped[str] = mapped_column(default="UTC")
    contact_email: Mapped[str | None] = mapped_column()

    program: Mapped[Program] = relationship(back_populates="conference", cascade="all, delete-orphan")
    email_settings: Mapped[EmailSettings] = relationship(
        back_populates="conference", cascade="all, delete-orphan"
    )

    def __init__(self, short_title, title=None, start_date=None, end_date=None, timezone="UTC", **kwargs):
        self.short_title = short_title
        self.title = title or short_title
        self.start_date = start_date
        self.end_date = end_date
        self.timezone = timezone
        self.program = kwargs.pop("program", None) or Program()
        self.email_settings = kwargs.pop("email_settings", None) or EmailSettings()
        super().__init__(**kwargs)

    @classmethod
    def get_by_short_title(cls, short_title) -> Conference:
        conference = db.session.execute(
            db.select(cls).where(cls.short_title == short_title)
        ).scalar_one_or_none()
        if conference is None:
            raise ConferenceNotFound(f'No conference called "{short_title}"')
        return conference

    def __repr__(self):
        return f"<Conference '{self.short_title}' (id: {self.id})>"


class Program(BaseModel):
    __tablename__ = "program"

    id: Mapped[int] = mapped_column(primary_key=True)
    conference_id: Mapped[int] = mapped_column(ForeignKey("conference.id"), unique=True)

    conference: Mapped[Conference] = relationship(back_populates="program")
    cfps: Mapped[list[Cfp]] = relationship(
        back_populates="program", cascade="all, delete-orphan", order_by="Cfp.id"
    )

    def for_events(self) -> Cfp | None:
        return for_events(self.cfps)

    def for_tracks(self) -> Cfp | None:
        return for_tracks(self.cfps)

    def for_booths(self) -> Cfp | None:
        return for_booths(self.cfps)

    def get_cfp(self, cfp_type) -> Cfp:
        for cfp in self.cfps:
            if cfp.cfp_type.lower() == cfp_type.lower():
                return cfp
        raise CfpNotFound(f'{self.conference.short_title} has no "{cfp_type}" call for proposals')

    def __repr__(self):
        return f"<Program (id: {self.id}, conference_id: {self.conference_id})>"


class EmailSettings(BaseModel):
    __tablename__ = "email_settings"

    id: Mapped[int] = mapped_column(primary_key=True)
    conference_id: Mapped[int] = mapped_column(ForeignKey("conference.id"), unique=True)

    send_on_cfp_dates_updated: Mapped[bool] = mapped_column(default=False)
    cfp_dates_updated_subject: Mapped[str] = mapped_column(default="")
    cfp_dates_updated_body: Mapped[str] = mapped_column(default="")

    conference: Mapped[Conference] = relationship(back_populates="email_settings")

    def __init__(self, send_on_cfp_dates_updated=False, cfp_dates_updated_subject="", cfp_dates_updated_body=""):
        self.send_on_cfp_dates_updated = send_on_cfp_dates_updated
        self.cfp_dates_updated_subject = cfp_dates_updated_subject
        self.cfp_dates_updated_body = cfp_dates_updated_body
