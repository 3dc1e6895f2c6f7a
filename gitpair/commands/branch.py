"""
Command for switching to a branch prefixed with the current pair's usernames.
"""

import logging
from typing import Callable

from gitpair.core import GitConfigFile, PairRepo, PairNotConfigured, USER_EMAIL
from gitpair.utils.email import EmailTemplate
from gitpair.utils.identity import decompose_email

logger = logging.getLogger(__name__)


def pair_branch_name(email: str, template: EmailTemplate, suffix: str) -> str:
    """Name a branch "<usernames>/<suffix>" after a pair email."""
    return f"{decompose_email(email, template)}/{suffix}"


def switch_to_pair_branch(
    store: GitConfigFile,
    template: EmailTemplate,
    suffix: str,
    open_repo: Callable[[], PairRepo],
    base_branch: str
) -> str:
    """Check out the pair branch for suffix, creating it from base_branch if needed.

    The repository is only opened once the pair email is known.
    Returns the full branch name.
    """
    email = store.get(USER_EMAIL)
    if email is None:
        raise PairNotConfigured(store.path)

    branch = pair_branch_name(email, template, suffix)
    repo = open_repo()

    if repo.branch_exists(branch):
        logger.debug("Branch %s exists, switching to it", branch)
        repo.switch_branch(branch)
    else:
        logger.debug("Creating branch %s from %s", branch, base_branch)
        repo.create_branch(branch, base_branch)

    return branch
