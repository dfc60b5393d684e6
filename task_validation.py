from datetime import date
import re

STATUSES = ('pending', 'in-progress', 'done')

ISO_DATE_RE = re.compile(
    r'^(\d{4}-\d{2}-\d{2})'
    r'(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$'
)


def _error(path, value, msg):
    return {
        'type': 'field',
        'location': 'body',
        'path': path,
        'value': value,
        'msg': msg,
    }


def _blank(value):
    return value is None or value == ''


def parse_iso_date(value):
    """Return the calendar date written in an ISO-8601 string, or None.

    Any time of day and UTC offset is ignored, so '2026-10-19T23:30:00-05:00'
    is 19 October no matter where the server runs.
    """
    if not isinstance(value, str):
        return None
    match = ISO_DATE_RE.match(value.strip())
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def validate_task(data):
    """Check a create/update body; returns (cleaned, errors)."""
    if not isinstance(data, dict):
        return None, [_error('', data, 'Request body must be a JSON object')]

    errors = []

    title = data.get('title')
    if isinstance(title, (int, float)) and not isinstance(title, bool):
        title = str(title)
    if title is None or (isinstance(title, str) and not title.strip()):
        errors.append(_error('title', data.get('title'), 'Title is required'))
    elif not isinstance(title, str):
        errors.append(_error('title', title, 'Title must be a string'))

    description = data.get('description')
    if not _blank(description) and not isinstance(description, str):
        errors.append(_error('description', description, 'Description must be a string'))

    due_date = data.get('due_date')
    parsed_due = None
    if not _blank(due_date):
        parsed_due = parse_iso_date(due_date)
        if parsed_due is None:
            errors.append(_error('due_date', due_date, 'Invalid due date'))

    status = data.get('status')
    if not _blank(status) and status not in STATUSES:
        errors.append(_error('status', status, 'Invalid status'))

    if errors:
        return None, errors

    return {
        'title': title,
        'description': description or None,
        'due_date': parsed_due,
        'status': status or None,
    }, []
