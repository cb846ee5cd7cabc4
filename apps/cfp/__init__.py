""" Call for Proposals app """
from flask import Blueprint

cfp = Blueprint("cfp", __name__)

from .base import save_cfp, delete_cfp, send_cfp_dates_updated_email  # noqa: E402, F401
from . import tasks  # noqa: E402, F401
