"""Naming rule renderer"""

import re

from file_storage.tokens import ResolutionContext, resolve_token

TOKEN_PATTERN = re.compile(r"\{([^{}]+)\}")


class RuleRenderer:
    """Expands {token} placeholders in directory and file naming rules."""

    @staticmethod
    def render(rule: str, ctx: ResolutionContext) -> str:
        """
        Render naming rule with resolved tokens.

        Unknown tokens are kept as literal text. Every time token shares
        `ctx.now`, while each random key occurrence gets its own value.
        Substituted text is not scanned again.

        Args:
            rule: Rule string with {token} placeholders
            ctx: Resolution context

        Returns:
            Expanded string

        Example:
            >>> RuleRenderer.render("{uid}/{date}", ResolutionContext(uid=7, now=datetime(2026, 1, 11)))
            '7/20260111'
        """
        if not rule:
            return ""

        def replace_placeholder(match: re.Match) -> str:
            value = resolve_token(match.group(1), ctx)
            return match.group(0) if value is None else value

        return TOKEN_PATTERN.sub(replace_placeholder, rule)
