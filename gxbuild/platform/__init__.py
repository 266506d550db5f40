"""Platform abstraction layer."""

from .files import (
    FileOpError,
    copy_file,
    copy_tree,
    create_directory,
    remove_directory,
    sha256_file,
    zip_tree,
)
from .paths import (
    PathError,
    change_directory,
    find_repository_root,
    get_current_directory,
    get_script_directory,
)
from .process import (
    ProcessError,
    run,
    run_streaming,
)

__all__ = [
    # files
    "FileOpError",
    "copy_file",
    "copy_tree",
    "create_directory",
    "remove_directory",
    "sha256_file",
    "zip_tree",
    # paths
    "PathError",
    "change_directory",
    "find_repository_root",
    "get_current_directory",
    "get_script_directory",
    # process
    "ProcessError",
    "run",
    "run_streaming",
]
