"""
Record store implementations.

- postgrest_client.py: hosted PostgREST/Supabase endpoint over httpx
- memory_store.py: in-memory store for demo mode and tests
- errors.py: StoreError raised by both
"""
