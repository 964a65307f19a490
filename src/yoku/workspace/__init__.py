"""Workspace, loading and save-time persistence."""

from .loader import (
    STARTER_FILE_CONTENT,
    STARTER_FILE_STEM,
    WorkspaceLoadError,
    bootstrap_data_dir,
    discover_list_files,
    load_workspace,
    read_list_files,
)
from .models import ListFile, Workspace, document_fingerprint, fingerprint_text, new_list_document
from .persistence import FileWriter, LocalFileWriter, SaveFailure, SaveReport, save_all

__all__ = [
    "FileWriter",
    "ListFile",
    "LocalFileWriter",
    "STARTER_FILE_CONTENT",
    "STARTER_FILE_STEM",
    "SaveFailure",
    "SaveReport",
    "Workspace",
    "WorkspaceLoadError",
    "bootstrap_data_dir",
    "discover_list_files",
    "document_fingerprint",
    "fingerprint_text",
    "load_workspace",
    "new_list_document",
    "read_list_files",
    "save_all",
]
