"""SQLite implementation of the mapping store."""

import asyncio
import logging
import os
import sqlite3
import threading
from typing import Any, Callable, List, Optional

from ..exceptions import StorageUnavailableError, UniquenessViolationError
from .base import MappingStoreBase
from .models import Mapping


MEMORY_PATH = ":memory:"


class SQLiteMappingStore(MappingStoreBase):
    """SQLite implementation of the mapping store.
    
    A single connection is shared by all requests. Calls are serialized with
    a lock and run in a worker thread so they never block the event loop.
    """
    
    CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS url (
        url TEXT NOT NULL,
        short TEXT NOT NULL UNIQUE,
        valid INTEGER NOT NULL DEFAULT 1
    )
    """
    
    def __init__(
        self,
        db_config: str,
        create_tables: bool = True,
        connection_timeout_seconds: int = 30,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize SQLite store.
        
        Args:
            db_config: Path to the database file, or ':memory:'
            create_tables: Whether to create the url table on initialize
            connection_timeout_seconds: How long to wait on a locked database
            logger: Optional logger instance
        """
        super().__init__(db_config)
        
        self.logger = logger or logging.getLogger(__name__)
        self.create_tables = create_tables
        self.connection_timeout_seconds = connection_timeout_seconds
        
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
    
    async def initialize(self) -> None:
        """Open the database and create the url table if enabled."""
        await asyncio.to_thread(self._open)
    
    def _open(self) -> None:
        with self._lock:
            if self._conn is not None:
                return
            
            try:
                if self.db_config != MEMORY_PATH:
                    directory = os.path.dirname(self.db_config)
                    if directory:
                        os.makedirs(directory, exist_ok=True)
                
                conn = sqlite3.connect(
                    self.db_config,
                    timeout=self.connection_timeout_seconds,
                    check_same_thread=False,
                )
                conn.row_factory = sqlite3.Row
                
                if self.create_tables:
                    self.logger.info("Creating url table if not exists...")
                    with conn:
                        conn.execute(self.CREATE_TABLE_SQL)
            except (sqlite3.Error, OSError) as e:
                self.logger.error(f"Could not open {self.db_config}: {e}")
                raise StorageUnavailableError(f"Could not open {self.db_config}: {e}") from e
            
            self._conn = conn
            self.logger.info(f"Opened SQLite database at {self.db_config}")
    
    async def _run(self, operation: Callable[..., Any], *args: Any) -> Any:
        return await asyncio.to_thread(self._call, operation, *args)
    
    def _call(self, operation: Callable[..., Any], *args: Any) -> Any:
        with self._lock:
            if self._conn is None:
                raise StorageUnavailableError("database is not initialized")
            try:
                return operation(self._conn, *args)
            except sqlite3.Error as e:
                self.logger.error(f"SQLite error in {operation.__name__}: {e}")
                raise StorageUnavailableError(str(e)) from e
    
    @staticmethod
    def _select(conn: sqlite3.Connection, short: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            "SELECT url, short, valid FROM url WHERE short = ?",
            (short,),
        ).fetchone()
    
    @staticmethod
    def _insert(conn: sqlite3.Connection, mapping: Mapping) -> None:
        try:
            with conn:
                conn.execute(
                    "INSERT INTO url (url, short, valid) VALUES (?, ?, ?)",
                    (mapping.url, mapping.short, int(mapping.valid)),
                )
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise UniquenessViolationError(f"Short '{mapping.short}' already exists") from e
            raise
    
    @staticmethod
    def _select_all(conn: sqlite3.Connection) -> List[sqlite3.Row]:
        return conn.execute("SELECT url, short, valid FROM url ORDER BY rowid").fetchall()
    
    @staticmethod
    def _ping(conn: sqlite3.Connection) -> None:
        conn.execute("SELECT 1").fetchone()
    
    async def get(self, short: str) -> Optional[Mapping]:
        """Look up a mapping by token."""
        row = await self._run(self._select, short)
        if row is None:
            return None
        return Mapping.from_row(row)
    
    async def insert(self, mapping: Mapping) -> None:
        """Insert a new mapping; the UNIQUE constraint on short rejects duplicates."""
        await self._run(self._insert, mapping)
        self.logger.debug(f"Inserted mapping: {mapping.short} -> {mapping.url}")
    
    async def list_all(self) -> List[Mapping]:
        """Return every mapping in insertion order."""
        rows = await self._run(self._select_all)
        return [Mapping.from_row(row) for row in rows]
    
    async def health_check(self) -> bool:
        """Check if the database answers a trivial query."""
        try:
            await self._run(self._ping)
            return True
        except StorageUnavailableError as e:
            self.logger.error(f"Health check failed: {e}")
            return False
    
    async def close(self) -> None:
        """Close the connection."""
        await asyncio.to_thread(self._close)
    
    def _close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                self.logger.debug(f"Closed SQLite database at {self.db_config}")
