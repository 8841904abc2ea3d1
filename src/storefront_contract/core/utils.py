"""
Utility functions for the contract layer.

Includes:
- Case conversion (snake_case -> camelCase) for wire aliases
- Scalar formatting for path, query and header values
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


# =============================================================================
# Case conversion utilities
# =============================================================================

# Pre-compiled regex patterns
_SNAKE_TO_CAMEL_PATTERN = re.compile(r'_([a-z0-9])')


def to_camel_case(name: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        seo_urls -> seoUrls
        cms_page -> cmsPage
        api_alias -> apiAlias
    """
    def replace_underscore(match):
        return match.group(1).upper()

    return _SNAKE_TO_CAMEL_PATTERN.sub(replace_underscore, name)


# =============================================================================
# Wire formatting utilities
# =============================================================================


def format_scalar(value: Any) -> str:
    """
    Render a single parameter value the way the platform expects it.

    Booleans become ``true``/``false``, enums their value, everything else
    its ``str()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_scalar(value.value)
    return str(value)
