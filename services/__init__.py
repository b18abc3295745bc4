"""
Services package - Business logic layer.

This package exposes business services while avoiding heavy imports at module load time.
"""

from importlib import import_module
from typing import Any

__all__ = [
    "ItemDatabase",
    "StoreService",
    "get_store_service",
    "reset_store_service",
]

_LAZY_MODULES = {
    "ItemDatabase": "services.item_database",
    "StoreService": "services.store_service",
    "get_store_service": "services.store_service",
    "reset_store_service": "services.store_service",
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        module = import_module(_LAZY_MODULES[name])
        value = getattr(module, name)
        globals()[name] = value
        return value

    raise AttributeError(f"module 'services' has no attribute '{name}'")
