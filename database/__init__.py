from .models import Base, StoragePolicyModel

__all__ = [
    "Base",
    "StoragePolicyModel",
]
