"""
Models package — re-exports Base and all models.

Import models here so Alembic's `target_metadata = Base.metadata`
picks up every table automatically.

When adding a new model:
    1. Create `roster/db/models/<table_name>.py`
    2. Import it here
"""

from roster.db.models.base import Base
from roster.db.models.employee import Employee
from roster.db.models.user import User

__all__ = [
    "Base",
    "Employee",
    "User",
]
