import os
from datetime import datetime
import pytz


def get_app_timezone():
    """Timezone used for stored timestamps (APP_TIMEZONE, default UTC)"""
    return pytz.timezone(os.environ.get('APP_TIMEZONE', 'UTC'))


def get_local_time_naive():
    """Get current application-local time as naive datetime for database storage"""
    return datetime.now(get_app_timezone()).replace(tzinfo=None)


def to_local_naive(dt):
    """Convert an aware datetime to naive application-local time; naive values pass through"""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(get_app_timezone()).replace(tzinfo=None)
