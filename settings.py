import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def parse_origins(value):
    """'*' stays a bare wildcard; anything else becomes a list of origins."""
    origins = [o.strip() for o in (value or '').split(',') if o.strip()]
    if not origins or origins == ['*']:
        return '*'
    return origins


DATABASE_URL = os.environ.get('DATABASE_URL', 'postgresql://postgres@localhost:5432/taskdb')
SECRET_KEY = os.environ.get('SECRET_KEY')

DB_POOL_MIN = int(os.environ.get('DB_POOL_MIN', 1))
DB_POOL_MAX = int(os.environ.get('DB_POOL_MAX', 20))

CORS_ORIGINS = parse_origins(os.environ.get('CORS_ORIGINS', '*'))

TIMELINE_DAYS = int(os.environ.get('TIMELINE_DAYS', 7))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
