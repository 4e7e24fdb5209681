"""Image and container naming helpers."""

import os
import re
from pathlib import Path
from typing import Optional

from .constants import CONTAINER_PREFIX, SESSION_ENV_VAR

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9_.-]+")


def sanitize_name(name: str) -> str:
    """Lower-case a name and squash characters Docker rejects in names."""
    cleaned = _INVALID_NAME_CHARS.sub("-", name.lower()).strip("-._")
    return cleaned or "project"


def image_name_for(project_root: Path, image_tag: Optional[str] = None) -> str:
    """Image name for a project, honouring an explicit tag."""
    if image_tag:
        return image_tag
    return f"{CONTAINER_PREFIX}-{sanitize_name(project_root.name)}"


def resolve_session(session: Optional[str] = None) -> str:
    """Session id: explicit value, then the hook's env var, then the parent shell pid."""
    if session:
        return sanitize_name(str(session))
    from_env = os.environ.get(SESSION_ENV_VAR)
    if from_env:
        return sanitize_name(from_env)
    return str(os.getppid())


def container_name_for(project_root: Path, session: str) -> str:
    """Container name scoped to a project and a shell session."""
    return f"{CONTAINER_PREFIX}-{sanitize_name(project_root.name)}-{sanitize_name(session)}"
