"""
Database schema, migrations, and seeding.

Runtime DB access lives in the services. This package is for repo-level DB operations:
- The `Example` ORM model shared by the seeder and the API
- Alembic migrations config
- Fixed example-data seeder
"""
