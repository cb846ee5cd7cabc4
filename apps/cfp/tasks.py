import click
from dateutil.parser import parse
from flask import current_app as app

from main import db
from models.cfp import Cfp
from models.conference import Conference
from models.exc import CfpNotFound, ConferenceNotFound

from . import cfp
from .base import delete_cfp, save_cfp


def parse_date(value):
    try:
        return parse(value).date()
    except (ValueError, OverflowError):
        raise click.BadParameter(f'"{value}" is not a date')


def get_conference(short_title) -> Conference:
    try:
        return Conference.get_by_short_title(short_title)
    except ConferenceNotFound as e:
        raise click.ClickException(str(e))


def get_cfp(conference, cfp_type) -> Cfp:
    try:
        return conference.program.get_cfp(cfp_type)
    except CfpNotFound as e:
        raise click.ClickException(str(e))


def save_or_fail(cfp, program=None):
    result = save_cfp(cfp, program)
    if not result:
        db.session.rollback()
        for field, reason in result.errors:
            click.echo(f"{field} {reason}", err=True)
        raise click.ClickException(f"The {cfp.cfp_type} cfp is not valid")


@cfp.cli.command("create")
@click.argument("conference")
@click.argument("cfp_type")
@click.argument("start")
@click.argument("end")
@click.option("-d", "--description", type=str, default=None, help="Shown to people submitting proposals")
def create(conference, cfp_type, start, end, description):
    """Open a call for proposals for a conference"""
    conference = get_conference(conference)
    new_cfp = Cfp(
        cfp_type=cfp_type,
        start_date=parse_date(start),
        end_date=parse_date(end),
        description=description,
    )
    save_or_fail(new_cfp, conference.program)
    app.logger.info("Created %s cfp for %s", new_cfp.cfp_type, conference.short_title)


@cfp.cli.command("dates")
@click.argument("conference")
@click.argument("cfp_type")
@click.argument("start")
@click.argument("end")
def dates(conference, cfp_type, start, end):
    """Move the dates of a call for proposals"""
    existing = get_cfp(get_conference(conference), cfp_type)
    existing.start_date = parse_date(start)
    existing.end_date = parse_date(end)
    save_or_fail(existing)


@cfp.cli.command("list")
@click.argument("conference")
def list_cfps(conference):
    """Show the calls for proposals of a conference and whether they're open"""
    conference = get_conference(conference)
    for c in conference.program.cfps:
        state = "open" if c.open() else "closed"
        click.echo(f"{c.cfp_type}: {c.start_date} - {c.end_date} ({state}, {c.remaining_days()} days left)")


@cfp.cli.command("delete")
@click.argument("conference")
@click.argument("cfp_type")
def delete(conference, cfp_type):
    """Remove a call for proposals"""
    delete_cfp(get_cfp(get_conference(conference), cfp_type))
