"""
SQL repositories for users and tasks.
"""

from .schema import init_schema
from .users import UserRepository
from .tasks import TaskRepository

__all__ = ['init_schema', 'UserRepository', 'TaskRepository']
