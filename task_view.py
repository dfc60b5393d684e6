"""Derived display data for the task manager page.

Every date here is a local calendar date. Values coming from the API are
either plain ``YYYY-MM-DD`` strings or ISO timestamps; both are reduced to the
date that is written in them, never converted through UTC, so a task due on
the 19th shows up on the 19th in every timezone.
"""
from datetime import date, datetime, timedelta
from email.utils import parsedate_to_datetime
import re

DATE_ONLY_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')

FALLBACK_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y/%m/%d',
    '%m/%d/%Y',
    '%d %b %Y',
    '%b %d, %Y',
)

SORT_OPTIONS = (
    ('created_desc', 'Newest'),
    ('created_asc', 'Oldest'),
    ('due_asc', 'Due ↑'),
    ('due_desc', 'Due ↓'),
)

FILTER_OPTIONS = (
    ('all', 'All', 'total'),
    ('pending', 'Pending', 'pending'),
    ('in-progress', 'In Progress', 'in_progress'),
    ('done', 'Done', 'done'),
)


def _date_from_match(match):
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def parse_date_safe(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    value = value.strip()

    match = DATE_ONLY_RE.match(value)
    if match:
        return _date_from_match(match)

    # ISO timestamp: keep the date part, drop the time and offset
    if 'T' in value:
        match = DATE_ONLY_RE.match(value.split('T')[0])
        if match:
            return _date_from_match(match)

    for fmt in FALLBACK_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue

    try:
        return parsedate_to_datetime(value).date()
    except (TypeError, ValueError, IndexError):
        return None


def iso_local_key(value):
    d = parse_date_safe(value)
    if d is None:
        return None
    return d.strftime('%Y-%m-%d')


def days_between(value, today=None):
    """Whole days from today until the date; negative when it has passed."""
    d = parse_date_safe(value)
    if d is None:
        return None
    today = today or date.today()
    return (d - today).days


def format_date(value):
    d = parse_date_safe(value)
    if d is None:
        return '—'
    return f"{d.month}/{d.day}/{d.year}"


def status_label(status):
    return (status or '').replace('-', ' ')


def smart_due_text(task, today=None):
    due_date = task.get('due_date')
    if not due_date:
        return None

    if task.get('status') == 'done':
        return {
            'text': f"Completed on {format_date(due_date)}",
            'color_class': 'done-text',
        }

    diff = days_between(due_date, today)
    if diff is None:
        return None

    if diff < 0:
        return {'text': f"Overdue by {abs(diff)} day(s)", 'color_class': 'overdue'}

    if diff == 0:
        return {'text': 'Due today', 'color_class': 'today'}

    return {'text': f"{diff} day(s) left", 'color_class': 'left'}


def count_by_status(tasks):
    return {
        'total': len(tasks),
        'pending': sum(1 for t in tasks if t.get('status') == 'pending'),
        'in_progress': sum(1 for t in tasks if t.get('status') == 'in-progress'),
        'done': sum(1 for t in tasks if t.get('status') == 'done'),
    }


def _matches(task, needle):
    title = (task.get('title') or '').lower()
    description = (task.get('description') or '').lower()
    return needle in title or needle in description


def visible_tasks(tasks, status_filter='all', query='', sort_by='created_desc'):
    """Filter, search and sort a copy of ``tasks``.

    Undated tasks sort after dated ones in both due-date orders. Unknown sort
    keys keep the incoming order.
    """
    out = list(tasks)

    if status_filter and status_filter != 'all':
        out = [t for t in out if t.get('status') == status_filter]

    needle = (query or '').strip().lower()
    if needle:
        out = [t for t in out if _matches(t, needle)]

    if sort_by == 'created_desc':
        out.sort(key=lambda t: t.get('id') or 0, reverse=True)
    elif sort_by == 'created_asc':
        out.sort(key=lambda t: t.get('id') or 0)
    elif sort_by == 'due_asc':
        def due_asc_key(t):
            d = parse_date_safe(t.get('due_date'))
            return (d is None, d or date.min)
        out.sort(key=due_asc_key)
    elif sort_by == 'due_desc':
        def due_desc_key(t):
            d = parse_date_safe(t.get('due_date'))
            return (d is not None, d or date.min)
        out.sort(key=due_desc_key, reverse=True)

    return out


def timeline(tasks, days=7, today=None):
    """Open-task counts for each of the next ``days`` calendar days."""
    base = today or date.today()

    open_by_day = {}
    for t in tasks:
        if t.get('status') == 'done':
            continue
        key = iso_local_key(t.get('due_date'))
        if key:
            open_by_day[key] = open_by_day.get(key, 0) + 1

    buckets = []
    for i in range(days):
        d = base + timedelta(days=i)
        key = d.strftime('%Y-%m-%d')
        buckets.append({
            'date': key,
            'short': f"{d:%b} {d.day}",
            'count': open_by_day.get(key, 0),
        })
    return buckets


def task_form(task=None):
    task = task or {}
    return {
        'title': task.get('title') or '',
        'description': task.get('description') or '',
        'due_date': iso_local_key(task.get('due_date')) or '',
        'status': task.get('status') or 'pending',
    }
