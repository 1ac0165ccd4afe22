"""Storage backend traits"""

from file_storage.backends.traits import BACKEND_TRAITS, BackendTraits, get_backend_traits

__all__ = [
    "BACKEND_TRAITS",
    "BackendTraits",
    "get_backend_traits",
]
