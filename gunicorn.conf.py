# Gunicorn configuration for TaskFlow
import os

wsgi_app = 'app:app'

# Worker processes
workers = int(os.getenv('WEB_CONCURRENCY', 4))
threads = int(os.getenv('PYTHON_MAX_THREADS', 2))
worker_class = 'gthread'

# Binding
port = os.getenv('PORT', '4000')
bind = f"0.0.0.0:{port}"
timeout = 120

# Handle SSL termination properly
forwarded_allow_ips = '*'
secure_scheme_headers = {
    'X-FORWARDED-PROTOCOL': 'ssl',
    'X-FORWARDED-PROTO': 'https',
    'X-FORWARDED-SSL': 'on'
}


def on_starting(server):
    # Create the schema once in the master; workers open their own pools.
    import tasks_db
    tasks_db.init_db()
    tasks_db.close_pool()
