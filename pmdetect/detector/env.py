"""Environment fast path.

Package managers export ``npm_config_user_agent`` to the scripts they run,
e.g. ``"pnpm/8.6.0 npm/? node/v20.5.0 linux x64"``. Only the first token
matters; ``name/version`` is rewritten to the ``name@version`` specifier
form. A value already in specifier form passes through unchanged.
"""

import logging
from typing import Optional

from pmdetect.core.config import get_user_agent_settings
from pmdetect.detector.specifier import parse_specifier
from pmdetect.detector.types import DetectResult, EnvHint, UnknownHandler

logger = logging.getLogger(__name__)


def get_user_agent() -> Optional[str]:
    """Return the raw npm_config_user_agent value, or None when unset."""
    return get_user_agent_settings().user_agent.strip() or None


def user_agent_specifier(user_agent: Optional[str]) -> Optional[str]:
    """``"pnpm/8.6.0 npm/? node/v20"`` -> ``"pnpm@8.6.0"``."""
    if not user_agent:
        return None
    tokens = user_agent.split()
    if not tokens:
        return None
    name, sep, version = tokens[0].partition("/")
    return f"{name}@{version}" if sep else name


def detect_from_env(
    mode: EnvHint,
    on_unknown: Optional[UnknownHandler] = None,
) -> tuple[bool, Optional[DetectResult]]:
    """Consult the user agent hint.

    Returns ``(final, result)``. ``final`` is True when the caller must
    return ``result`` without traversing directories.

    ONLY with no hint set is final with no result. A hint that does not
    resolve falls through to traversal in both modes; PREFER does not
    offer it to ``on_unknown`` so directory signals get a chance first.
    """
    if mode == EnvHint.OFF:
        return False, None

    specifier = user_agent_specifier(get_user_agent())
    if specifier is None:
        return mode == EnvHint.ONLY, None

    result = parse_specifier(specifier, on_unknown if mode == EnvHint.ONLY else None)
    if result is not None:
        logger.debug("Resolved %s from npm_config_user_agent", result.agent)
        return True, result
    return False, None
