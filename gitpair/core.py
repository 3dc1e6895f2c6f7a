"""
Core gitpair functionality - errors, settings and git wrappers.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

import git
from git import Repo
from git.exc import CommandError, GitCommandError

logger = logging.getLogger(__name__)

DEFAULT_BASE_BRANCH = 'master'

USER_NAME = 'user.name'
USER_EMAIL = 'user.email'


class GitPairError(Exception):
    """Base exception for gitpair operations."""
    pass


class MalformedEmail(GitPairError):
    def __init__(self, email: str):
        super().__init__(f"invalid email address: {email}")
        self.email = email


class UnknownUsername(GitPairError):
    def __init__(self, username: str):
        super().__init__(f"no such username: {username}")
        self.username = username


class InvalidUsername(GitPairError):
    def __init__(self, username: str, reason: str):
        super().__init__(f"invalid username {username!r}: {reason}")
        self.username = username


class AuthorsFileUnreadable(GitPairError):
    def __init__(self, path, cause, description: Optional[str] = None):
        if description is None:
            description = _first_line(cause)
        super().__init__(f"unable to read authors from file ({path}): {description}")
        self.path = path
        self.cause = cause


class ConfigReadFailed(GitPairError):
    def __init__(self, path, key: str, cause):
        super().__init__(f"unable to get {key} from git config ({path}): {cause}")
        self.path = path
        self.key = key
        self.cause = cause


class ConfigWriteFailed(GitPairError):
    def __init__(self, path, key: str, cause):
        super().__init__(f"unable to set {key} in git config ({path}): {cause}")
        self.path = path
        self.key = key
        self.cause = cause


class PairNotConfigured(GitPairError):
    """Raised when a branch is requested before any pair was set."""

    def __init__(self, path):
        super().__init__(
            f"unable to get current git author email from config file: {path} "
            f"(run 'pair USER1 [USER2 ...]' first)"
        )
        self.path = path


class BranchOperationFailed(GitPairError):
    pass


class TemplateUnavailable(GitPairError):
    pass


@dataclass
class PairSettings:
    """Locations and defaults resolved from the environment."""
    config_file: Path
    pairs_file: Path
    email_template: Optional[str]
    base_branch: str

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> 'PairSettings':
        """Build settings, letting non-empty environment variables win over defaults."""
        if environ is None:
            environ = os.environ

        home = Path(environ.get('HOME') or Path.home())

        settings = cls(
            config_file=Path(environ.get('PAIR_GIT_CONFIG') or home / '.gitconfig_local'),
            pairs_file=Path(environ.get('PAIR_FILE') or home / '.pairs'),
            email_template=environ.get('PAIR_EMAIL') or None,
            base_branch=environ.get('PAIR_BASE_BRANCH') or DEFAULT_BASE_BRANCH,
        )
        logger.debug("Resolved settings: %s", settings)
        return settings

    def resolve_email_template(self) -> str:
        """Return the configured template, deriving one from the network if unset."""
        if self.email_template:
            return self.email_template

        from gitpair.utils.email import default_email_template

        try:
            return default_email_template()
        except TemplateUnavailable as e:
            logger.debug("Default email template unavailable: %s", e)
            raise TemplateUnavailable(
                "please set $PAIR_EMAIL to configure the pair email template"
            ) from e


class GitConfigFile:
    """Reads and writes properties of a single git config file."""

    def __init__(self, path):
        self.path = Path(path)
        self._git = git.Git()

    def get(self, key: str) -> Optional[str]:
        """Get a property value, or None if the key is not set."""
        logger.debug("git config --file %s %s", self.path, key)
        try:
            output = self._git.config('--file', str(self.path), key)
        except GitCommandError as e:
            # git config exits with 1 when the key is absent
            if e.status == 1:
                return None
            raise ConfigReadFailed(self.path, key, _describe(e)) from e
        except CommandError as e:
            raise ConfigReadFailed(self.path, key, _describe(e)) from e

        return output.rstrip('\r\n')

    def set(self, key: str, value: str) -> None:
        """Set a property value, replacing any previous one."""
        logger.debug("git config --file %s %s %r", self.path, key, value)
        try:
            self._git.config('--file', str(self.path), key, value)
        except CommandError as e:
            raise ConfigWriteFailed(self.path, key, _describe(e)) from e


class PairRepo:
    """Wrapper around the Git repository the pair branches live in."""

    def __init__(self, repo_path: Optional[str] = None):
        """Initialize with repository path (defaults to current directory)."""
        search_path = Path(repo_path) if repo_path else Path.cwd()
        try:
            self.repo = Repo(search_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise BranchOperationFailed(f"Not a Git repository: {search_path}")

        if self.repo.working_tree_dir is None:
            raise BranchOperationFailed(f"Not a Git work tree: {search_path}")
        self.repo_path = Path(self.repo.working_tree_dir)

    def branch_exists(self, branch: str) -> bool:
        """Check whether a revision with the given name resolves."""
        try:
            self.repo.git.rev_parse('--verify', '--quiet', branch)
        except GitCommandError:
            return False
        return True

    def create_branch(self, branch: str, start_point: str) -> None:
        """Create a branch from start_point and check it out."""
        self._checkout(['-b', branch, start_point], branch)

    def switch_branch(self, branch: str) -> None:
        """Check out an existing branch."""
        self._checkout([branch], branch)

    def _checkout(self, args: List[str], branch: str) -> None:
        # stdout/stderr are inherited so git's messages reach the terminal
        cmd = ['git', 'checkout'] + args
        logger.debug("Running %s in %s", cmd, self.repo_path)
        try:
            result = subprocess.run(cmd, cwd=self.repo_path)
        except (subprocess.SubprocessError, OSError) as e:
            raise BranchOperationFailed(f"unable to check out git branch: {branch}: {e}") from e

        if result.returncode != 0:
            raise BranchOperationFailed(f"unable to check out git branch: {branch}")


def _first_line(error: Exception) -> str:
    lines = [line.strip() for line in str(error).splitlines() if line.strip()]
    return lines[0] if lines else type(error).__name__


def _describe(error: CommandError) -> str:
    """Turn a GitPython command error into a one-line message."""
    stderr = (error.stderr or '').strip()
    if stderr.startswith("stderr: "):
        stderr = stderr[len("stderr: "):]
    stderr = stderr.strip().strip("'").strip()
    if stderr:
        return stderr.splitlines()[0]
    return f"git exited with status {error.status}"
