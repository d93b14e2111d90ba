# utils/date_utils.py
from datetime import date, datetime

from django.utils import timezone

ISO_FORMAT = "%Y-%m-%d"
DISPLAY_FORMAT = "%d/%m/%Y"


def to_display_format(value):
    """
    Convert a YYYY-MM-DD string (or a date/datetime) into DD/MM/YYYY.
    """
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        value = datetime.strptime(value, ISO_FORMAT).date()
    return value.strftime(DISPLAY_FORMAT)


def from_display_format(value):
    """
    Convert DD/MM/YYYY back into YYYY-MM-DD for date inputs.
    """
    return datetime.strptime(value, DISPLAY_FORMAT).strftime(ISO_FORMAT)


def today_iso():
    return timezone.localdate().strftime(ISO_FORMAT)
