"""File storage module: naming rules and backend dispatch for storage policies"""

from file_storage.backends.traits import BackendTraits, get_backend_traits
from file_storage.options import decode_options, encode_options, prepare_for_save
from file_storage.path_builder import StoragePathBuilder
from file_storage.rule_renderer import RuleRenderer
from file_storage.tokens import ResolutionContext

__all__ = [
    "BackendTraits",
    "ResolutionContext",
    "RuleRenderer",
    "StoragePathBuilder",
    "decode_options",
    "encode_options",
    "get_backend_traits",
    "prepare_for_save",
]
