"""Detect Python tooling in a project and map it to Portage atoms."""

from pathlib import Path
from typing import List

from ..core.constants import PROJECT_PACKAGES


class ProjectDetector:
    def __init__(self, project_root: Path):
        self.project_root = project_root

    def suggest_packages(self) -> List[str]:
        """Atoms for the tooling this project appears to use."""
        suggestions = []
        for marker, atoms in PROJECT_PACKAGES.items():
            if self._has_file(marker):
                suggestions.extend(atoms)

        pyproject = self._read_file('pyproject.toml')
        if '[tool.poetry' in pyproject:
            suggestions.append('dev-python/poetry')
        if '[tool.pytest' in pyproject:
            suggestions.append('dev-python/pytest')
        if 'hatchling' in pyproject:
            suggestions.append('dev-python/hatchling')

        # Preserve detection order without repeats
        unique = []
        for atom in suggestions:
            if atom not in unique:
                unique.append(atom)
        return unique

    def _has_file(self, filename: str) -> bool:
        """Check if file exists in project root"""
        return (self.project_root / filename).exists()

    def _read_file(self, filename: str) -> str:
        """Read file content"""
        filepath = self.project_root / filename
        if filepath.exists():
            try:
                return filepath.read_text()
            except (OSError, UnicodeDecodeError):
                return ""
        return ""
