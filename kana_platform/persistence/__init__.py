"""Persistence layer for the attempt log."""

from .attempt_store import AttemptStore, open_attempt_store
from .database import SCHEMA_VERSION, get_connection, init_db
