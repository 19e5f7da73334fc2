"""``.env`` loading and ``$VAR`` expansion for settings values."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

__all__ = ["expand_env_vars", "expand_options", "load_env_file"]

# ${NAME} or bare $NAME
_REFERENCE = re.compile(r"\$(?:\{(?P<braced>[^}]+)\}|(?P<bare>[A-Za-z_]\w*))")


def load_env_file(path: Optional[Union[str, Path]] = None, *, override: bool = False) -> bool:
    """Load a ``.env`` file into ``os.environ``.

    Without a path, python-dotenv searches upward from the working directory.
    Existing variables win unless ``override`` is set.

    Returns:
        True if a file was found and loaded
    """
    return load_dotenv(dotenv_path=path, override=override)


def expand_env_vars(value: str, *, strict: bool = False) -> str:
    """Substitute environment variables referenced in ``value``.

    Unset variables are left as written, or raise ``KeyError`` when
    ``strict`` is set.

    Example:
        >>> os.environ["LISTINGS_HOST"] = "https://edurent.example"
        >>> expand_env_vars("${LISTINGS_HOST}/api")
        'https://edurent.example/api'
    """

    def substitute(match: "re.Match[str]") -> str:
        name = match.group("braced") or match.group("bare")
        if name in os.environ:
            return os.environ[name]
        if strict:
            raise KeyError(f"Environment variable not set: {name}")
        return match.group(0)

    return _REFERENCE.sub(substitute, value)


def _expand(value: Any, strict: bool) -> Any:
    if isinstance(value, str):
        return expand_env_vars(value, strict=strict)
    if isinstance(value, dict):
        return {key: _expand(item, strict) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand(item, strict) for item in value]
    return value


def expand_options(options: Dict[str, Any], *, strict: bool = False) -> Dict[str, Any]:
    """Expand every string inside a (possibly nested) settings mapping."""
    return _expand(options, strict)
