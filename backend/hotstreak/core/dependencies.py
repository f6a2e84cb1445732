"""
Dependency injection for shared clients and resources
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import create_client, Client, ClientOptions

from hotstreak.core.config import settings
from hotstreak.services.habits.repository import SupabaseRecordStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_supabase_client(access_token: Optional[str] = None) -> Client:
    """
    Get Supabase client instance

    When an access token is given, table requests run as that user so
    row-level security applies.
    """
    options = ClientOptions(postgrest_client_timeout=settings.STORE_TIMEOUT_SECONDS)
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY, options=options)
    if access_token:
        client.postgrest.auth(access_token)
    return client


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Extract the bearer token from the Authorization header, if any"""
    return credentials.credentials if credentials else None


def get_record_store(access_token: Optional[str] = Depends(get_access_token)) -> SupabaseRecordStore:
    """Get a record store bound to the caller's session"""
    return SupabaseRecordStore(get_supabase_client(access_token), access_token)
