"""Rule token resolution"""

import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from config.settings import get_settings
from file_storage.backends.traits import get_backend_traits
from models.policy import BackendType

RANDOM_KEY_ALPHABET = string.ascii_letters + string.digits


def random_key(length: int) -> str:
    """Generate a random alphanumeric token of the given length."""
    return "".join(secrets.choice(RANDOM_KEY_ALPHABET) for _ in range(length))


def current_time() -> datetime:
    """Current time in the configured application timezone."""
    return datetime.now(ZoneInfo(get_settings().app.timezone))


@dataclass(frozen=True)
class ResolutionContext:
    """Per-call inputs for rule expansion.

    `base_path` is set only for directory rules and `origin_name` only for
    file name rules; None makes the matching token unavailable.
    """

    uid: int
    now: datetime
    backend_type: BackendType = BackendType.OTHER
    base_path: str | None = None
    origin_name: str | None = None


def _resolve_path(ctx: ResolutionContext) -> str | None:
    if ctx.base_path is None:
        return None
    return ctx.base_path + "/"


def _resolve_origin_name(ctx: ResolutionContext) -> str | None:
    if ctx.origin_name is None:
        return None
    if ctx.origin_name:
        return ctx.origin_name
    # Name unknown client-side: leave the provider's own callback variable
    return get_backend_traits(ctx.backend_type).origin_name_placeholder


TOKEN_RESOLVERS: dict[str, Callable[[ResolutionContext], str | None]] = {
    "uid": lambda ctx: str(ctx.uid),
    "timestamp": lambda ctx: str(int(ctx.now.timestamp())),
    "datetime": lambda ctx: ctx.now.strftime("%Y%m%d%H%M%S"),
    "date": lambda ctx: ctx.now.strftime("%Y%m%d"),
    "randomkey8": lambda ctx: random_key(8),
    "randomkey16": lambda ctx: random_key(16),
    "path": _resolve_path,
    "originname": _resolve_origin_name,
}


def resolve_token(name: str, ctx: ResolutionContext) -> str | None:
    """
    Resolve a single rule token.

    Args:
        name: Token name without braces (e.g. 'uid')
        ctx: Resolution context

    Returns:
        Substitution string, or None when the token is unknown or unavailable
    """
    resolver = TOKEN_RESOLVERS.get(name)
    if resolver is None:
        return None
    return resolver(ctx)
