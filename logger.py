import logging

log = logging.getLogger("mail")

# Mail backends which don't actually deliver anything
NON_DELIVERING_BACKENDS = {"console", "dummy", "locmem", "file"}


def mail_logging(message, app):
    backend = app.config.get("MAIL_BACKEND", "smtp")
    if backend in NON_DELIVERING_BACKENDS:
        title = "WOULD SEND MAIL"
    else:
        title = "SENDING MAIL"
    msg = f"""
+++++ {title} +++++
TO:  {message.to}
FROM:  {message.from_email}
SUBJECT:  {message.subject}
---------
{message.body}
++++++++++
    """
    log.info(msg)
