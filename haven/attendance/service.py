from datetime import datetime

from ..store import attendance, now_ms


def day_start_ms(now):
    """Local midnight, on the server clock, of the day containing ``now``."""
    day = datetime.fromtimestamp(now / 1000).replace(hour=0, minute=0, second=0, microsecond=0)
    return int(day.timestamp() * 1000)


def day_key(user_id, now):
    return f'{user_id}-{day_start_ms(now)}'


def has_marked_today(user_id, now=None):
    now = now_ms() if now is None else now
    return attendance.find(key=day_key(user_id, now)) is not None


def mark_today(user_id, now=None):
    """Record today's check-in. Returns False if the user already checked in."""
    now = now_ms() if now is None else now
    key = day_key(user_id, now)
    with attendance.mutate() as records:
        if any(r.get('key') == key for r in records):
            return False
        records.append({'key': key, 'userId': user_id, 'at': now})
    return True
