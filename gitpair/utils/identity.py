"""
Composition of pair identities and recovery of usernames from pair emails.
"""

from dataclasses import dataclass
from typing import List

from gitpair.utils.authors import AuthorsDirectory
from gitpair.utils.email import EmailTemplate, split_email

USERNAME_SEPARATOR = '+'
NAME_SEPARATOR = ' and '


@dataclass(frozen=True)
class Identity:
    """Author name and email for a pair."""
    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


def email_for_usernames(template: EmailTemplate, usernames: List[str]) -> str:
    """Generate an email address from a list of usernames.

    For example, given "lb" and "mb" and the template "git@example.com"
    returns "git+lb+mb@example.com". A single username gives
    "mb@example.com" and no usernames give the template itself.
    """
    if not usernames:
        return str(template)
    if len(usernames) == 1:
        return f"{usernames[0]}@{template.host}"
    joined = USERNAME_SEPARATOR.join(usernames)
    return f"{template.local}{USERNAME_SEPARATOR}{joined}@{template.host}"


def names_for_usernames(usernames: List[str], authors: AuthorsDirectory) -> str:
    """Join the full names of usernames with " and "."""
    return NAME_SEPARATOR.join(authors.lookup(username) for username in usernames)


def compose_identity(usernames: List[str], authors: AuthorsDirectory, template: EmailTemplate) -> Identity:
    """Build the pair identity for usernames, in the order given."""
    name = names_for_usernames(usernames, authors)
    return Identity(name=name, email=email_for_usernames(template, usernames))


def decompose_email(email: str, template: EmailTemplate) -> str:
    """Recover the "+"-joined usernames from a composed email.

    "git+lb+mb@example.com" gives "lb+mb" and "mb@example.com" gives "mb".
    """
    local, _ = split_email(email)
    prefix = template.local + USERNAME_SEPARATOR
    if local.startswith(prefix):
        return local[len(prefix):]
    return local
