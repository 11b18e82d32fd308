"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses: settings, origin
admission, error translation, and the clients for the backing stores (asyncpg
pool, Supabase REST). Keep feature-specific SQL and request logic in the
corresponding feature package (e.g. `businesses/`).
"""
