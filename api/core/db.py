"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once by the FastAPI lifespan (see `api/main.py`) and owned
by the business backend that wraps it; nothing here keeps module state.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

TLS (`DATABASE_SSL`):
- empty           -> asyncpg default negotiation (honours `sslmode` in the URL)
- off / false     -> no TLS
- strict          -> TLS with certificate verification
- anything else   -> TLS without certificate verification
"""

from __future__ import annotations

import asyncio
import socket
import ssl
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .settings import DEFAULT_POSTGRES_PORT, DirectPoolConfig, ParsedPoolConfig

POOL_MIN_SIZE = 0
POOL_MAX_SIZE = 5

_TLS_DISABLED = {"off", "false"}


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def ssl_option(mode: str) -> ssl.SSLContext | bool | None:
    mode = (mode or "").strip().lower()
    if not mode:
        return None
    if mode in _TLS_DISABLED:
        return False

    context = ssl.create_default_context()
    if mode != "strict":
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


async def resolve_ipv4(host: str, port: int) -> str:
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(host, port, family=socket.AF_INET, type=socket.SOCK_STREAM)
    if not infos:
        raise OSError(f"No IPv4 address found for {host}.")
    return infos[0][4][0]


async def create_pool(config: DirectPoolConfig | ParsedPoolConfig) -> asyncpg.Pool:
    """
    Build the shared pool for either connection-string flavour.

    `min_size=0` keeps startup independent of database availability; the
    first query opens the first connection.
    """
    ssl_value = ssl_option(config.ssl_mode)

    if isinstance(config, DirectPoolConfig):
        # An explicit DATABASE_SSL wins over `sslmode` in the URL.
        dsn = _sanitize_database_url(config.dsn) if ssl_value is not None else config.dsn
        parts = urlsplit(dsn)
        host, port = parts.hostname, parts.port or DEFAULT_POSTGRES_PORT
        connect_args: dict[str, Any] = {"dsn": dsn}
    else:
        host, port = config.host, config.port
        connect_args = {
            "host": config.host,
            "port": config.port,
            "user": config.user,
            "password": config.password,
            "database": config.database,
        }

    if config.force_ipv4 and host:
        # Explicit host overrides the one in the DSN.
        connect_args["host"] = await resolve_ipv4(host, port)
        if isinstance(ssl_value, ssl.SSLContext) and ssl_value.check_hostname:
            # The certificate names the hostname, not the resolved address.
            ssl_value.check_hostname = False

    return await asyncpg.create_pool(
        **connect_args,
        ssl=ssl_value,
        min_size=POOL_MIN_SIZE,
        max_size=POOL_MAX_SIZE,
    )


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]
