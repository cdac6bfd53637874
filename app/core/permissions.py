# /app/core/permissions.py

from enum import Enum
from typing import Dict, List


class DefaultRoles(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    PROGRAM_COORDINATOR = "PROGRAM_COORDINATOR"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    PARENT = "PARENT"


class Permission(str, Enum):
    MANAGE_CLASSES = "classes:manage"
    VIEW_CLASSES = "classes:view"
    MANAGE_TEACHERS = "teachers:manage"
    VIEW_TEACHERS = "teachers:view"
    MANAGE_SUBJECTS = "subjects:manage"
    VIEW_SUBJECTS = "subjects:view"
    MANAGE_GRADEBOOK = "gradebook:manage"
    VIEW_GRADEBOOK = "gradebook:view"
    MARK_ATTENDANCE = "attendance:mark"
    VIEW_ATTENDANCE = "attendance:view"
    VIEW_ANALYTICS = "analytics:view"
    MANAGE_ROLES = "roles:manage"


_ALL = list(Permission)
_READ_ONLY = [
    Permission.VIEW_CLASSES,
    Permission.VIEW_SUBJECTS,
    Permission.VIEW_GRADEBOOK,
    Permission.VIEW_ATTENDANCE,
]

DEFAULT_ROLE_PERMISSIONS: Dict[DefaultRoles, List[Permission]] = {
    DefaultRoles.SUPER_ADMIN: _ALL,
    DefaultRoles.ADMIN: [p for p in _ALL if p is not Permission.MANAGE_ROLES],
    DefaultRoles.PROGRAM_COORDINATOR: [
        Permission.MANAGE_CLASSES,
        Permission.VIEW_CLASSES,
        Permission.VIEW_TEACHERS,
        Permission.MANAGE_SUBJECTS,
        Permission.VIEW_SUBJECTS,
        Permission.VIEW_GRADEBOOK,
        Permission.VIEW_ATTENDANCE,
        Permission.VIEW_ANALYTICS,
    ],
    DefaultRoles.TEACHER: [
        Permission.VIEW_CLASSES,
        Permission.VIEW_SUBJECTS,
        Permission.MANAGE_GRADEBOOK,
        Permission.VIEW_GRADEBOOK,
        Permission.MARK_ATTENDANCE,
        Permission.VIEW_ATTENDANCE,
        Permission.VIEW_ANALYTICS,
    ],
    DefaultRoles.STUDENT: _READ_ONLY,
    DefaultRoles.PARENT: _READ_ONLY,
}
