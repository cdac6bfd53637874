# /app/db/base_class.py

import re
import uuid

from sqlalchemy.orm import declarative_base, declared_attr


class _TableNameMixin:
    """Derives `student_profiles` from `StudentProfile` unless a model sets its own name."""

    @declared_attr
    def __tablename__(cls) -> str:
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower() + "s"


Base = declarative_base(cls=_TableNameMixin)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def id_factory(prefix: str):
    """Column default producing ids like `cls_1a2b3c4d5e6f`."""
    return lambda: new_id(prefix)
