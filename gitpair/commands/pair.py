"""
Command for setting the git author info to a new pair.
"""

import logging
from typing import List

from gitpair.core import GitConfigFile, InvalidUsername, USER_NAME, USER_EMAIL
from gitpair.commands.show import show_current_pair
from gitpair.utils.authors import AuthorsDirectory
from gitpair.utils.email import EmailTemplate
from gitpair.utils.identity import USERNAME_SEPARATOR, Identity, compose_identity

logger = logging.getLogger(__name__)


def validate_usernames(usernames: List[str], template: EmailTemplate) -> None:
    """Reject usernames that could not be recovered from a pair email."""
    for username in usernames:
        if not username:
            raise InvalidUsername(username, "usernames cannot be empty")
        if USERNAME_SEPARATOR in username:
            raise InvalidUsername(username, f"usernames cannot contain {USERNAME_SEPARATOR!r}")
        if username == template.local:
            raise InvalidUsername(
                username, f"it is the local part of the email template {template}"
            )


def set_pair(
    store: GitConfigFile,
    authors: AuthorsDirectory,
    template: EmailTemplate,
    usernames: List[str]
) -> Identity:
    """Compose the identity for usernames and write it to the config file.

    Usernames are sorted first so that any order names the same pair.
    Nothing is written if a username is unknown.
    """
    validate_usernames(usernames, template)
    identity = compose_identity(sorted(usernames), authors, template)
    logger.debug("Composed identity %s", identity)

    store.set(USER_NAME, identity.name)
    store.set(USER_EMAIL, identity.email)
    return identity


def set_and_show_pair(
    store: GitConfigFile,
    authors: AuthorsDirectory,
    template: EmailTemplate,
    usernames: List[str]
) -> int:
    """Set the new pair then print the author info read back from the file."""
    set_pair(store, authors, template, usernames)
    return show_current_pair(store)
