"""
PostgreSQL connection helper for bundler-cleanup.

This module provides a simple connection function for the bundler
bookkeeping datasource. Uses psycopg for the connection.
"""

import psycopg
from loguru import logger

from bundler_core.config import settings


def get_db_connection():
    """
    Get a PostgreSQL database connection.

    Returns a context manager that can be used with 'with' statement.
    The transaction is committed (or rolled back on error) and the
    connection closed when the context exits.

    Usage:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT job_id FROM jobs")

    Returns:
        psycopg.Connection: A PostgreSQL connection.

    Raises:
        psycopg.OperationalError: If the datasource cannot be reached.
    """
    try:
        conn = psycopg.connect(settings.POSTGRES_DSN)
        logger.debug("Connected to PostgreSQL")
        return conn
    except Exception as e:
        logger.error(f"Failed to connect to PostgreSQL: {e}")
        raise
