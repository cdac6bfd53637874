# /app/services/database_helpers/base_repository_sql.py

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class BaseRepositorySQL:
    """Shared session plumbing for the SQL repositories."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        """
        Commits the unit of work. On failure the session is rolled back so it
        stays usable for the rest of the request, then the error propagates.
        """
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise


def sync_links(current, wanted_ids, key: str, build):
    """
    Returns the new list of link rows for a many-to-many relationship.
    Rows whose `key` is still wanted are kept as-is, missing ones are built
    with `build(id)`. Assigning the result to a delete-orphan relationship
    removes the rest without tripping the link table's unique constraint.
    """
    existing = {getattr(row, key): row for row in current}
    result = []
    for linked_id in dict.fromkeys(wanted_ids):
        result.append(existing.get(linked_id) or build(linked_id))
    return result
