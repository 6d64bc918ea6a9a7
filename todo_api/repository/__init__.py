from .todos import TodoRepository
from .users import UserRepository

__all__ = ["TodoRepository", "UserRepository"]
