# Ensure all models are registered on import
from . import models  # noqa: F401
from .registry import (
    ReplicationModel,
    get_all_replication_models,
    get_replication_model,
    register_replication_model,
)

__all__ = [
    "ReplicationModel",
    "get_all_replication_models",
    "get_replication_model",
    "register_replication_model",
]
