import logging

from flask import current_app as app
from flask_mailman import EmailMessage
from jinja2 import TemplateError
from jinja2.sandbox import ImmutableSandboxedEnvironment

from logger import mail_logging

log = logging.getLogger(__name__)


def create_sandbox_env():
    """Build a safe environment for rendering emails

    Organisers write the subject and body of these emails, so they get
    rendered in ImmutableSandboxedEnvironment with no globals at all.
    """
    # Don't autoescape because this is used to generate plaintext output
    return ImmutableSandboxedEnvironment(autoescape=False)


def render_template_string_sandboxed(template_str, **kwargs):
    env = create_sandbox_env()
    template = env.from_string(template_str)
    return template.render(**kwargs)


def format_plaintext_email(text, **kwargs):
    """Render an organiser-written email, substituting {{ placeholders }}.

    Only the values passed in are available. Unknown names render as nothing,
    and text that isn't a valid template is sent as written.
    """
    try:
        return render_template_string_sandboxed(text, **kwargs)
    except TemplateError as e:
        log.warning("Unable to render email, sending as written: %s", e)
        return text


def from_email(name):
    sender_name, email = app.config[name]
    return f"{sender_name} <{email}>"


def send_plaintext_email(subject, body, recipients, sender="CFP_EMAIL"):
    msg = EmailMessage(subject, body, from_email=from_email(sender), to=recipients)
    mail_logging(msg, app)
    msg.send()
    return msg
