"""Database Infrastructure: SQLAlchemy declarative Base.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite for the local cache file, asyncpg when DATABASE_URL points at PostgreSQL
"""
