"""
Supabase (PostgREST) HTTP client helpers.

Used endpoint:
- GET /rest/v1/<table>?select=...&order=...&limit=...  -> [{...}, ...]

The caller's Authorization header is forwarded verbatim so row-level security
applies to the end user; the anon key goes in `apikey`.
"""

from __future__ import annotations

from typing import Any

import httpx


# Supabase failures carry the upstream status so it can be passed through.
class SupabaseError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise SupabaseError("SUPABASE_URL is empty.")
    return base_url.rstrip("/")


def create_client(base_url: str, *, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """
    One client per process; httpx pools connections across concurrent requests.
    """
    return httpx.AsyncClient(base_url=_normalize_base_url(base_url), transport=transport)


async def select_rows(
    client: httpx.AsyncClient,
    *,
    table: str,
    api_key: str,
    authorization: str,
    columns: list[str],
    order: str,
    limit: int,
) -> list[dict[str, Any]]:
    table = (table or "").strip()
    if not table:
        raise SupabaseError("Supabase table name is empty.")

    try:
        resp = await client.get(
            f"/rest/v1/{table}",
            params={"select": ",".join(columns), "order": order, "limit": str(limit)},
            headers={
                "apikey": api_key,
                "Authorization": authorization,
                "Accept": "application/json",
            },
        )
    except httpx.HTTPError as exc:
        raise SupabaseError(f"Supabase request failed: {exc}") from exc

    if not resp.is_success:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise SupabaseError(
            f"Supabase select failed: {resp.status_code} {body}",
            status_code=resp.status_code,
        )

    try:
        data = resp.json()
    except ValueError as exc:
        raise SupabaseError("Supabase returned invalid JSON.") from exc
    if not isinstance(data, list):
        raise SupabaseError("Supabase returned a non-list payload.")
    return [row for row in data if isinstance(row, dict)]
