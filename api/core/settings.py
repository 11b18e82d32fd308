"""
Environment-driven configuration.

Everything here is read once at process start (see `main.create_app`). Values
are plain environment variables so the service runs unchanged on Railway,
Docker or a local shell.

Backend selection:
- BUSINESS_BACKEND=direct    -> asyncpg pool from DATABASE_URL as-is
- BUSINESS_BACKEND=parsed    -> asyncpg pool from fields parsed out of DATABASE_URL
- BUSINESS_BACKEND=supabase  -> Supabase REST (SUPABASE_URL + SUPABASE_ANON_KEY)
- unset                      -> supabase if SUPABASE_URL is set, else direct if
                                DATABASE_URL is set, else listing is disabled
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

DEFAULT_PORT = 4000
DEFAULT_POSTGRES_PORT = 5432
DEFAULT_SUPABASE_TABLE = "businesses"

BACKEND_DIRECT = "direct"
BACKEND_PARSED = "parsed"
BACKEND_SUPABASE = "supabase"
BACKEND_KINDS = (BACKEND_DIRECT, BACKEND_PARSED, BACKEND_SUPABASE)

WILDCARD_ORIGIN = "*"

_TRUTHY = {"1", "true", "yes", "on"}

logger = logging.getLogger(__name__)


class BackendConfigError(ValueError):
    pass


@dataclass(frozen=True)
class DirectPoolConfig:
    dsn: str
    ssl_mode: str = ""
    force_ipv4: bool = False


@dataclass(frozen=True)
class ParsedPoolConfig:
    host: str
    database: str
    port: int = DEFAULT_POSTGRES_PORT
    user: str | None = None
    password: str | None = None
    ssl_mode: str = ""
    force_ipv4: bool = False


@dataclass(frozen=True)
class SupabaseConfig:
    base_url: str
    api_key: str
    table: str = DEFAULT_SUPABASE_TABLE


BackendConfig = DirectPoolConfig | ParsedPoolConfig | SupabaseConfig


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    allowed_origins: tuple[str, ...] = ()
    # Selected variant name, even when its configuration did not resolve.
    backend_kind: str = ""
    backend: BackendConfig | None = None


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = _env(name).lower()
    if not raw:
        return default
    return raw in _TRUTHY


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def parse_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in (raw or "").split(",") if origin.strip())


def allowed_origins() -> tuple[str, ...]:
    return parse_origins(os.environ.get("CORS_ORIGIN", ""))


def parse_database_url(url: str, *, ssl_mode: str = "", force_ipv4: bool = False) -> ParsedPoolConfig:
    """
    Split a postgres:// URL into explicit connection fields.

    User and password are percent-decoded. The error messages never include
    the URL itself since it carries credentials.
    """
    url = (url or "").strip()
    if not url:
        raise BackendConfigError("DATABASE_URL is empty.")

    try:
        parts = urlsplit(url)
        port_value = parts.port
    except ValueError as exc:
        raise BackendConfigError("DATABASE_URL is not a valid URL.") from exc

    if parts.scheme not in ("postgres", "postgresql"):
        raise BackendConfigError(f"Unsupported DATABASE_URL scheme: {parts.scheme or '<none>'}.")
    if not parts.hostname:
        raise BackendConfigError("DATABASE_URL has no host.")

    database = unquote(parts.path.lstrip("/"))
    if not database:
        raise BackendConfigError("DATABASE_URL has no database name.")

    return ParsedPoolConfig(
        host=parts.hostname,
        port=port_value or DEFAULT_POSTGRES_PORT,
        user=unquote(parts.username) if parts.username else None,
        password=unquote(parts.password) if parts.password is not None else None,
        database=database,
        ssl_mode=ssl_mode,
        force_ipv4=force_ipv4,
    )


def backend_kind() -> str:
    kind = _env("BUSINESS_BACKEND").lower()
    if kind:
        return kind
    if _env("SUPABASE_URL"):
        return BACKEND_SUPABASE
    if _env("DATABASE_URL"):
        return BACKEND_DIRECT
    return ""


def backend_config(kind: str) -> BackendConfig | None:
    """
    Resolve the configuration of the selected backend variant.

    Returns None when the variant cannot be configured; the listing endpoint
    then stays disabled for the whole process.
    """
    if not kind:
        return None

    if kind == BACKEND_SUPABASE:
        base_url = _env("SUPABASE_URL")
        api_key = _env("SUPABASE_ANON_KEY")
        if not base_url or not api_key:
            logger.warning("supabase_not_configured url_set=%s key_set=%s", bool(base_url), bool(api_key))
            return None
        return SupabaseConfig(
            base_url=base_url,
            api_key=api_key,
            table=_env("SUPABASE_BUSINESSES_TABLE") or DEFAULT_SUPABASE_TABLE,
        )

    if kind not in BACKEND_KINDS:
        logger.warning("unknown_business_backend kind=%s", kind)
        return None

    url = _env("DATABASE_URL")
    if not url:
        logger.warning("database_not_configured kind=%s", kind)
        return None

    ssl_mode = _env("DATABASE_SSL")
    force_ipv4 = _env_bool("DATABASE_FORCE_IPV4")
    if kind == BACKEND_DIRECT:
        return DirectPoolConfig(dsn=url, ssl_mode=ssl_mode, force_ipv4=force_ipv4)

    try:
        return parse_database_url(url, ssl_mode=ssl_mode, force_ipv4=force_ipv4)
    except BackendConfigError as exc:
        logger.warning("database_url_unparsable error=%s", exc)
        return None


def load_settings() -> Settings:
    kind = backend_kind()
    return Settings(
        port=port(),
        allowed_origins=allowed_origins(),
        backend_kind=kind,
        backend=backend_config(kind),
    )
