"""
Habits Repository - Record store access layer
All Supabase queries for habits and completions go through SupabaseRecordStore
"""
from typing import List, Dict, Any, Optional, Sequence, Tuple
import logging

import httpx
from postgrest.exceptions import APIError
from supabase import Client, AuthApiError

from hotstreak.core.config import settings
from hotstreak.core.exceptions import (
    DuplicateRecordError,
    StoreFailureError,
    StoreTimeoutError
)

logger = logging.getLogger(__name__)

# Postgres error code for unique constraint violations
UNIQUE_VIOLATION = "23505"

# (column, operator, value) where operator is one of eq, gte, lte
Filter = Tuple[str, str, Any]
FILTER_OPERATORS = ("eq", "gte", "lte")


class SupabaseRecordStore:
    """
    Record store backed by Supabase tables

    Every method either returns store data or raises a StoreFailureError
    subclass; nothing is retried here.
    """

    def __init__(self, client: Client, access_token: Optional[str] = None,
                 page_size: Optional[int] = None):
        self.client = client
        self.access_token = access_token
        self.page_size = page_size or settings.STORE_PAGE_SIZE

    # ========================================================================
    # QUERIES
    # ========================================================================

    def query(self, table: str, filters: Optional[Sequence[Filter]] = None,
              order_by: Optional[str] = None, desc: bool = False) -> List[Dict[str, Any]]:
        """
        Select rows from a table

        PostgREST caps every response (1000 rows by default), so rows are
        fetched in pages of page_size until a short page comes back. Paging
        needs a stable order, so order_by should name a unique column.

        Args:
            table: Table name
            filters: Optional (column, operator, value) predicates, ANDed together
            order_by: Column to sort by (defaults to id)
            desc: Sort descending when True

        Returns:
            List of row dictionaries

        Raises:
            StoreFailureError: If any page fails
        """
        rows = []
        start = 0
        while True:
            request = self._select(table, filters, order_by or "id", desc)
            request = request.range(start, start + self.page_size - 1)
            page = self._execute(request, f"query {table}").data or []
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            start += self.page_size

    def _select(self, table: str, filters: Optional[Sequence[Filter]], order_by: str, desc: bool):
        request = self.client.table(table).select("*")
        for column, operator, value in filters or ():
            if operator not in FILTER_OPERATORS:
                raise ValueError(f"Unsupported filter operator: {operator}")
            request = getattr(request, operator)(column, value)
        return request.order(order_by, desc=desc)

    # ========================================================================
    # MUTATIONS
    # ========================================================================

    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a row and return the stored representation

        Raises:
            DuplicateRecordError: If a unique constraint rejects the row
            StoreFailureError: If the insert fails
        """
        result = self._execute(self.client.table(table).insert(record), f"insert into {table}")
        if not result.data:
            raise StoreFailureError(f"Insert into {table} returned no data")
        return result.data[0]

    def update(self, table: str, record_id: str, changes: Dict[str, Any],
               match: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Update a row by id

        Args:
            table: Table name
            record_id: Row id
            changes: Columns to set
            match: Extra column values the row must still have for the update to apply

        Returns:
            Updated row, or None if no row matched

        Raises:
            StoreFailureError: If the update fails
        """
        request = self.client.table(table).update(changes).eq("id", record_id)
        for column, value in (match or {}).items():
            request = request.eq(column, value)

        result = self._execute(request, f"update {table} {record_id}")
        return result.data[0] if result.data else None

    def delete(self, table: str, record_id: str) -> Dict[str, Any]:
        """
        Delete a row by id

        Returns:
            Deleted row data, empty if nothing matched

        Raises:
            StoreFailureError: If the delete fails
        """
        request = self.client.table(table).delete().eq("id", record_id)
        result = self._execute(request, f"delete from {table} {record_id}")
        return result.data[0] if result.data else {}

    # ========================================================================
    # AUTH
    # ========================================================================

    def current_user(self) -> Optional[Dict[str, Any]]:
        """
        Resolve the session's access token to a user identity

        Returns:
            Dict with the user's id and email, or None if there is no valid session

        Raises:
            StoreFailureError: If Supabase Auth cannot be reached
        """
        if not self.access_token:
            return None

        try:
            response = self.client.auth.get_user(self.access_token)
        except AuthApiError as e:
            logger.warning(f"Rejected access token: {e}")
            return None
        except httpx.TimeoutException as e:
            logger.error(f"Auth lookup timed out: {e}")
            raise StoreTimeoutError(f"Timed out resolving current user: {e}")
        except Exception as e:
            logger.error(f"Auth lookup failed: {e}")
            raise StoreFailureError(f"Failed to resolve current user: {e}")

        user = response.user if response else None
        if user is None:
            return None
        return {"id": user.id, "email": user.email}

    def _execute(self, request, action: str):
        try:
            return request.execute()
        except httpx.TimeoutException as e:
            logger.error(f"Store timeout during {action}: {e}")
            raise StoreTimeoutError(f"Timed out during {action}")
        except APIError as e:
            logger.error(f"Store error during {action}: {e}")
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateRecordError(f"Duplicate record during {action}: {e.message}")
            raise StoreFailureError(f"Failed to {action}: {e.message}")
        except Exception as e:
            logger.error(f"Database error during {action}: {e}")
            raise StoreFailureError(f"Failed to {action}: {e}")
