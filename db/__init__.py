"""
Catalog database: schema, migrations, data access, and seeding.

- SQLAlchemy table definitions shared by the store, migrations, and tests
- Async CRUD store used by the seed runner
- Alembic migrations config
- One-shot catalog seed
"""
