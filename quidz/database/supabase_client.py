from typing import Any, Dict, List, Optional

from supabase import create_client, Client
from quidz.config import settings


class SupabaseClient:
    """Process-wide holders for the anon client and the service-role client."""
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Used by scripts and auth admin calls."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def rows(result: Any) -> List[Dict[str, Any]]:
    """Rows of a query response. maybe_single() yields None instead of a response when nothing matched."""
    if result is None or not result.data:
        return []
    if isinstance(result.data, dict):
        return [result.data]
    return list(result.data)


def first(result: Any) -> Optional[Dict[str, Any]]:
    found = rows(result)
    return found[0] if found else None
