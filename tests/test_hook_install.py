"""Tests for jig.hooks.install module."""

import pytest

from jig.hooks import HookError, install_commit_msg_hook


@pytest.fixture
def executable(temp_dir):
    """A stand-in for the installed jig executable."""
    exe = temp_dir / "bin" / "jig"
    exe.parent.mkdir()
    exe.write_text("#!/bin/sh\n")
    return exe


class TestInstallCommitMsgHook:
    """Tests for install_commit_msg_hook function."""

    def test_creates_symlink(self, temp_dir, executable):
        """Test a fresh install."""
        hooks_dir = temp_dir / "hooks"

        hook = install_commit_msg_hook(executable, hooks_path=hooks_dir)

        assert hook == hooks_dir / "commit-msg"
        assert hook.is_symlink()
        assert hook.resolve() == executable.resolve()

    def test_looks_up_hooks_path(self, temp_dir, executable, mocker):
        """Test that the hooks directory comes from git by default."""
        mocker.patch("jig.hooks.install.get_hooks_path", return_value=temp_dir / "hooks")

        hook = install_commit_msg_hook(executable)

        assert hook == temp_dir / "hooks" / "commit-msg"

    def test_keeps_existing_hook_when_declined(self, temp_dir, executable):
        """Test that an existing hook survives a 'no'."""
        hooks_dir = temp_dir / "hooks"
        hooks_dir.mkdir()
        existing = hooks_dir / "commit-msg"
        existing.write_text("#!/bin/sh\nexit 0\n")

        hook = install_commit_msg_hook(
            executable, hooks_path=hooks_dir, confirm_replace=lambda path: False
        )

        assert hook is None
        assert not existing.is_symlink()
        assert existing.read_text() == "#!/bin/sh\nexit 0\n"

    def test_replaces_existing_hook_when_confirmed(self, temp_dir, executable):
        """Test replacement after confirmation."""
        hooks_dir = temp_dir / "hooks"
        hooks_dir.mkdir()
        (hooks_dir / "commit-msg").write_text("old")
        asked = []

        hook = install_commit_msg_hook(
            executable,
            hooks_path=hooks_dir,
            confirm_replace=lambda path: asked.append(path) or True,
        )

        assert asked == [hooks_dir / "commit-msg"]
        assert hook.is_symlink()

    def test_force_skips_confirmation(self, temp_dir, executable):
        """Test that --force replaces without asking."""
        hooks_dir = temp_dir / "hooks"
        hooks_dir.mkdir()
        (hooks_dir / "commit-msg").write_text("old")

        def _never(path):
            raise AssertionError("should not ask")

        hook = install_commit_msg_hook(
            executable, force=True, hooks_path=hooks_dir, confirm_replace=_never
        )

        assert hook.is_symlink()

    def test_symlink_failure(self, temp_dir, executable, mocker):
        """Test that OS errors become HookError."""
        mocker.patch("os.symlink", side_effect=OSError("read-only file system"))

        with pytest.raises(HookError) as exc_info:
            install_commit_msg_hook(executable, hooks_path=temp_dir / "hooks")

        assert "symbolic link" in str(exc_info.value)
