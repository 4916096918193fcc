"""Result export utilities (clipboard text, CSV)."""

from .teams import (
    AssignmentExportError,
    CSV_HEADERS,
    build_clipboard_teams,
    export_assignments_to_csv,
)

__all__ = [
    "AssignmentExportError",
    "CSV_HEADERS",
    "build_clipboard_teams",
    "export_assignments_to_csv",
]
