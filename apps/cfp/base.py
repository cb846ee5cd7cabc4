import logging

from sqlalchemy import inspect

from main import db
from models import no_autoflush
from models.cfp import Cfp, ValidationResult
from models.conference import Program

from ..common.email import format_plaintext_email, send_plaintext_email

log = logging.getLogger(__name__)


def save_cfp(cfp: Cfp, program: Program | None = None) -> ValidationResult:
    """Validate and commit a Cfp, emailing the conference if its dates moved.

    A new Cfp can be passed along with the program it should be added to.
    If the Cfp is invalid nothing is written and the edit is thrown away: a saved
    Cfp is expired back to its stored values, and a new one is taken out of the
    session. The caller must check the result.
    """
    result = cfp.validate(program)
    if not result:
        log.info("Not saving %r: %s", cfp, result.as_dict())
        discard_changes(cfp)
        return result

    # This has to be worked out before the commit resets the attribute history
    notify = cfp.notify_on_cfp_date_update()

    if program is not None and cfp not in program.cfps:
        program.cfps.append(cfp)

    db.session.add(cfp)
    db.session.commit()
    log.info("Saved %r", cfp)

    if notify:
        send_cfp_dates_updated_email(cfp)

    return result


def discard_changes(cfp: Cfp):
    if inspect(cfp).has_identity:
        db.session.expire(cfp)
        return

    with no_autoflush(cfp):
        program = cfp.program
        if program is not None and cfp in program.cfps:
            program.cfps.remove(cfp)
    if cfp in db.session:
        db.session.expunge(cfp)


def delete_cfp(cfp: Cfp):
    program = cfp.program
    program.cfps.remove(cfp)
    db.session.commit()
    log.info("Deleted %s cfp from %r", cfp.cfp_type, program)


def send_cfp_dates_updated_email(cfp: Cfp):
    conference = cfp.conference
    settings = conference.email_settings

    if not conference.contact_email:
        log.warning(
            "Dates of %s cfp for %s changed, but the conference has no contact email",
            cfp.cfp_type,
            conference.short_title,
        )
        return None

    values = {
        "conference": conference.title,
        "cfp_type": cfp.cfp_type,
        "start_date": cfp.start_date.isoformat(),
        "end_date": cfp.end_date.isoformat(),
    }
    subject = format_plaintext_email(settings.cfp_dates_updated_subject, **values)
    body = format_plaintext_email(settings.cfp_dates_updated_body, **values)

    log.info("Sending cfp dates updated email for %s to %s", conference.short_title, conference.contact_email)
    return send_plaintext_email(subject, body, [conference.contact_email])
