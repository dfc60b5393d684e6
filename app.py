from flask import Flask, render_template, request, jsonify
from flask_cors import CORS
from datetime import date
import logging

import settings
import tasks_db
import task_view
from task_validation import parse_iso_date, validate_task

app = Flask(__name__)
app.secret_key = settings.SECRET_KEY

CORS(app, resources={r"/api/*": {
    "origins": settings.CORS_ORIGINS,
    "send_wildcard": settings.CORS_ORIGINS == "*",
}})

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def server_error():
    return jsonify({'error': 'Server error'}), 500


def not_found():
    return jsonify({'error': 'Not found'}), 404


# ids are int4 (SERIAL); anything larger cannot exist
MAX_TASK_ID = 2147483647


def client_today():
    """The browser's calendar day (query param, then cookie), else the server's."""
    for value in (request.args.get('today'), request.cookies.get('today')):
        parsed = parse_iso_date(value)
        if parsed is not None:
            return parsed
    return date.today()


@app.cli.command('init-db')
def init_db_command():
    """Create the tasks table and its indexes."""
    tasks_db.init_db()


@app.errorhandler(404)
def handle_404(e):
    if request.path.startswith('/api/'):
        return not_found()
    return render_template('404.html'), 404


@app.route('/')
def index():
    return render_template('landing.html')


@app.route('/tasks')
def task_manager():
    status_filter = request.args.get('filter', 'all')
    query = request.args.get('q', '')
    sort_by = request.args.get('sort', 'created_desc')
    today = client_today()

    load_failed = False
    try:
        tasks = tasks_db.list_tasks()
    except Exception as e:
        logger.error(f"Error loading tasks for page: {e}")
        tasks = []
        load_failed = True

    cards = [
        {
            'task': t,
            'due': task_view.smart_due_text(t, today),
            'due_display': task_view.format_date(t.get('due_date')),
            'status_label': task_view.status_label(t.get('status')),
            'form': task_view.task_form(t),
        }
        for t in task_view.visible_tasks(tasks, status_filter, query, sort_by)
    ]

    return render_template(
        'tasks.html',
        cards=cards,
        counts=task_view.count_by_status(tasks),
        timeline=task_view.timeline(tasks, settings.TIMELINE_DAYS, today),
        today=today.strftime('%Y-%m-%d'),
        status_filter=status_filter,
        query=query,
        sort_by=sort_by,
        sort_options=task_view.SORT_OPTIONS,
        filter_options=task_view.FILTER_OPTIONS,
        load_failed=load_failed,
    )


@app.route('/api/health')
def health_check():
    try:
        tasks_db.ping()
        return jsonify({'status': 'healthy', 'database': 'connected'})
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return jsonify({'status': 'unhealthy', 'database': 'disconnected'}), 500


@app.route('/api/overview', methods=['GET'])
def overview():
    days = request.args.get('days', settings.TIMELINE_DAYS, type=int)
    days = max(1, min(days, 31))
    try:
        tasks = tasks_db.list_tasks()
    except Exception as e:
        logger.error(f"Error building overview: {e}")
        return server_error()

    return jsonify({
        'counts': task_view.count_by_status(tasks),
        'timeline': task_view.timeline(tasks, days, client_today()),
    })


@app.route('/api/tasks', methods=['GET'])
def get_tasks():
    try:
        return jsonify(tasks_db.list_tasks())
    except Exception as e:
        logger.error(f"Error fetching tasks: {e}")
        return server_error()


@app.route('/api/tasks/<int:task_id>', methods=['GET'])
def get_task(task_id):
    if task_id > MAX_TASK_ID:
        return not_found()

    try:
        task = tasks_db.get_task(task_id)
    except Exception as e:
        logger.error(f"Error fetching task {task_id}: {e}")
        return server_error()

    if task is None:
        return not_found()
    return jsonify(task)


@app.route('/api/tasks', methods=['POST'])
def add_task():
    data, errors = validate_task(request.get_json(silent=True))
    if errors:
        return jsonify({'errors': errors}), 400

    try:
        task = tasks_db.create_task(**data)
    except Exception as e:
        logger.error(f"Error adding task: {e}")
        return server_error()

    logger.info(f"Created task {task['id']}")
    return jsonify(task), 201


@app.route('/api/tasks/<int:task_id>', methods=['PUT'])
def update_task(task_id):
    data, errors = validate_task(request.get_json(silent=True))
    if errors:
        return jsonify({'errors': errors}), 400

    if task_id > MAX_TASK_ID:
        return not_found()

    try:
        task = tasks_db.update_task(task_id, **data)
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {e}")
        return server_error()

    if task is None:
        return not_found()
    return jsonify(task)


@app.route('/api/tasks/<int:task_id>', methods=['DELETE'])
def delete_task(task_id):
    if task_id > MAX_TASK_ID:
        return not_found()

    try:
        deleted = tasks_db.delete_task(task_id)
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}")
        return server_error()

    if not deleted:
        return not_found()
    return jsonify({'success': True})


if __name__ == '__main__':
    tasks_db.init_db()
    app.run(port=4000, debug=True)
