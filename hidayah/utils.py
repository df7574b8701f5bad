# hidayah/utils.py
import os
import re
import sys

import platformdirs

APP_NAME = "HidayahCLI"
APP_AUTHOR = "HidayahHub"

_ANSI_ESCAPE = re.compile(r'\x1B\[[0-?]*[ -/]*[@-~]')


def get_app_path(resource_path: str = '', writable: bool = False) -> str:
    """
    Get the absolute path to a resource or writable directory.

    Handles both script execution and PyInstaller frozen bundles.

    Args:
        resource_path: Relative path to a resource/directory.
                       Leave empty for the base directory itself.
        writable:
            If True: the path lives next to the executable (frozen) or the
                     project root (script), and its directory is created.
            If False: the path is relative to the bundled read-only root.

    Returns:
        Absolute path as a string.
    """
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        base_path = os.path.dirname(sys.executable) if writable else sys._MEIPASS
    else:
        # utils.py sits in hidayah/, the project root is its parent
        base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    full_path = os.path.join(base_path, resource_path) if resource_path else base_path

    if writable and resource_path:
        # Looks like a file -> make its parent, otherwise make the directory itself
        if '.' in os.path.basename(resource_path) and not resource_path.endswith(('/', '\\')):
            target_dir = os.path.dirname(full_path)
        else:
            target_dir = full_path
        if target_dir:
            os.makedirs(target_dir, exist_ok=True)

    return full_path


def user_dir(kind: str, sub_path: str = '') -> str:
    """
    Writable per-user directory ("config" or "cache").

    Windows keeps everything next to the executable, Linux/macOS use the
    platformdirs locations.
    """
    if sys.platform == "win32":
        return get_app_path(os.path.join(kind, sub_path) if sub_path else kind, writable=True)
    if kind == "config":
        base = platformdirs.user_config_dir(APP_NAME, APP_AUTHOR)
    else:
        base = platformdirs.user_cache_dir(APP_NAME, APP_AUTHOR)
    path = os.path.join(base, sub_path) if sub_path else base
    os.makedirs(path, exist_ok=True)
    return path


def strip_ansi(s: str) -> str:
    """Remove ANSI escape codes for accurate length calculation."""
    return _ANSI_ESCAPE.sub('', s)


def wrap_text(text: str, width: int) -> str:
    """Wrap text to specified width"""
    words = text.split()
    lines = []
    current_line = []
    current_length = 0

    for word in words:
        if current_length + len(word) + 1 <= width:
            current_line.append(word)
            current_length += len(word) + 1
        else:
            if current_line:
                lines.append(' '.join(current_line))
            current_line = [word]
            current_length = len(word)

    if current_line:
        lines.append(' '.join(current_line))

    return '\n'.join(lines)
