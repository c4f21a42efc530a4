"""Install the jig executable as the repository's commit-msg hook."""

import os
from pathlib import Path
from typing import Callable, Optional

from jig.git import get_hooks_path
from jig.hooks.commit_msg import HOOK_NAME
from jig.hooks.exceptions import HookError
from jig.utils.logging import log_message


def install_commit_msg_hook(
    executable: Path,
    force: bool = False,
    confirm_replace: Optional[Callable[[Path], bool]] = None,
    hooks_path: Optional[Path] = None,
) -> Optional[Path]:
    """Symlink the jig executable into the hooks directory as 'commit-msg'.

    Git then runs jig with argv[0] == 'commit-msg', which switches it into
    hook mode.

    Args:
        executable: Path to the installed jig executable.
        force: Replace an existing hook without asking.
        confirm_replace: Asked whether to replace an existing hook.
        hooks_path: Hooks directory override; looked up from git when None.

    Returns:
        Path of the installed hook, or None if the user kept the existing one.

    Raises:
        HookError: If the symlink cannot be created.
    """
    hooks_dir = hooks_path or get_hooks_path()
    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_file = hooks_dir / HOOK_NAME

    if hook_file.exists() or hook_file.is_symlink():
        replace = force or (confirm_replace is not None and confirm_replace(hook_file))
        if not replace:
            return None
        hook_file.unlink()

    try:
        os.symlink(executable, hook_file)
    except OSError as e:
        raise HookError(f"Unable to create symbolic link {hook_file} -> {executable}: {e}")

    log_message(f"Installed {HOOK_NAME} hook: {hook_file} -> {executable}")
    return hook_file
