"""
Plumbing for the users API: env settings, the asyncpg `Database`, the
`{"error": ...}` error mapping and log setup. Route code lives in `users/`.
"""
