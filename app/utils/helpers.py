from datetime import datetime, timedelta, timezone


def utcnow():
    """Naive UTC now, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(dt=None):
    dt = dt or utcnow()
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def day_window(dt=None):
    """Half-open [midnight, next midnight) window around dt."""
    start = start_of_day(dt)
    return start, start + timedelta(days=1)


def format_datetime(dt, format='%B %d, %Y at %I:%M %p'):
    """Format datetime for display (timezone-aware)"""
    if isinstance(dt, str):
        dt = datetime.fromisoformat(dt)

    # Ensure timezone-aware
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.strftime(format)


def get_time_ago(dt):
    """Get relative time string (timezone-aware)"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    now = datetime.now(timezone.utc)
    delta = now - dt

    if delta.days > 30:
        months = delta.days // 30
        return f"{months} month{'s' if months > 1 else ''} ago"
    elif delta.days > 0:
        return f"{delta.days} day{'s' if delta.days > 1 else ''} ago"
    elif delta.seconds > 3600:
        hours = delta.seconds // 3600
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    elif delta.seconds > 60:
        minutes = delta.seconds // 60
        return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
    else:
        return "Just now"


def parse_int(value, default, minimum=None, maximum=None):
    """Lenient int parsing for query-string arguments."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if minimum is not None and number < minimum:
        number = minimum
    if maximum is not None and number > maximum:
        number = maximum
    return number
