from .base import ProjectNotFoundError, ProjectStore
from .memory import InMemoryProjectStore
from .supabase_store import SupabaseProjectStore

__all__ = ["InMemoryProjectStore", "ProjectNotFoundError", "ProjectStore", "SupabaseProjectStore"]
