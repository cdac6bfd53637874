# /app/db/errors.py

"""
Store-level exceptions raised by the SQL repositories.
"""

from sqlalchemy.exc import SQLAlchemyError


class RecordNotFoundError(SQLAlchemyError):
    """
    Raised when an update or delete targets a row that does not exist.
    Mirrors the "record to update/delete not found" failure of the store,
    so a delete of a missing id never succeeds silently.
    """

    def __init__(self, model: str, record_id: str):
        self.model = model
        self.record_id = record_id
        super().__init__(f"{model} with ID {record_id} does not exist.")
