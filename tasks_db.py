from datetime import date, datetime
import logging
import threading

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor

import settings

logger = logging.getLogger(__name__)

db_pool = None
pool_lock = threading.Lock()


def get_pool():
    global db_pool
    if db_pool is not None:
        return db_pool
    with pool_lock:
        # another thread may have built it while we waited
        if db_pool is None:
            try:
                db_pool = psycopg2.pool.ThreadedConnectionPool(
                    minconn=settings.DB_POOL_MIN,
                    maxconn=settings.DB_POOL_MAX,
                    dsn=settings.DATABASE_URL,
                    cursor_factory=RealDictCursor
                )
                logger.info("Database connection pool created successfully")
            except Exception as e:
                logger.error(f"Failed to create database pool: {e}")
                raise
    return db_pool


def close_pool():
    global db_pool
    with pool_lock:
        if db_pool is not None:
            db_pool.closeall()
            db_pool = None
            logger.info("Database connection pool closed")


def get_db():
    try:
        conn = get_pool().getconn()
        return conn, conn.cursor()
    except Exception as e:
        logger.error(f"Failed to get database connection: {e}")
        raise


def release_db(conn, cur):
    try:
        cur.close()
        get_pool().putconn(conn)
    except Exception as e:
        logger.error(f"Failed to release database connection: {e}")


def _rollback(conn):
    try:
        conn.rollback()
    except Exception as e:
        logger.error(f"Failed to roll back transaction: {e}")


def serialize_task(row):
    # DATE columns go out as plain YYYY-MM-DD so clients never see a UTC instant
    if row is None:
        return None
    task = dict(row)
    for key, value in task.items():
        if isinstance(value, datetime):
            task[key] = value.isoformat()
        elif isinstance(value, date):
            task[key] = value.strftime('%Y-%m-%d')
    return task


def init_db():
    conn, cur = get_db()
    try:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                id SERIAL PRIMARY KEY,
                title TEXT NOT NULL,
                description TEXT,
                due_date DATE,
                status TEXT NOT NULL DEFAULT 'pending'
                    CHECK (status IN ('pending', 'in-progress', 'done')),
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
        """)

        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);
            CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date);
        """)

        conn.commit()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        _rollback(conn)
        raise
    finally:
        release_db(conn, cur)


def ping():
    conn, cur = get_db()
    try:
        cur.execute("SELECT 1;")
        cur.fetchone()
    finally:
        release_db(conn, cur)


def list_tasks():
    conn, cur = get_db()
    try:
        cur.execute("SELECT * FROM tasks ORDER BY id DESC;")
        return [serialize_task(row) for row in cur.fetchall()]
    finally:
        release_db(conn, cur)


def get_task(task_id):
    conn, cur = get_db()
    try:
        cur.execute("SELECT * FROM tasks WHERE id = %s;", (task_id,))
        return serialize_task(cur.fetchone())
    finally:
        release_db(conn, cur)


def create_task(title, description=None, due_date=None, status=None):
    conn, cur = get_db()
    try:
        cur.execute("""
            INSERT INTO tasks (title, description, due_date, status)
            VALUES (%s, %s, %s, %s)
            RETURNING *;
        """, (
            title,
            description or None,
            due_date or None,
            status or 'pending'
        ))
        row = cur.fetchone()
        conn.commit()
        return serialize_task(row)
    except Exception:
        _rollback(conn)
        raise
    finally:
        release_db(conn, cur)


def update_task(task_id, title, description=None, due_date=None, status=None):
    conn, cur = get_db()
    try:
        cur.execute("""
            UPDATE tasks SET
                title = %s,
                description = %s,
                due_date = %s,
                status = COALESCE(%s, status),
                updated_at = CURRENT_TIMESTAMP
            WHERE id = %s
            RETURNING *;
        """, (
            title,
            description or None,
            due_date or None,
            status or None,
            task_id
        ))

        if cur.rowcount == 0:
            _rollback(conn)
            return None

        row = cur.fetchone()
        conn.commit()
        return serialize_task(row)
    except Exception:
        _rollback(conn)
        raise
    finally:
        release_db(conn, cur)


def delete_task(task_id):
    conn, cur = get_db()
    try:
        cur.execute("DELETE FROM tasks WHERE id = %s;", (task_id,))

        if cur.rowcount == 0:
            _rollback(conn)
            return False

        conn.commit()
        return True
    except Exception:
        _rollback(conn)
        raise
    finally:
        release_db(conn, cur)
