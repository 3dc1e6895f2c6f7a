"""
Utility modules for gitpair.
"""

from .email import (
    EmailTemplate,
    split_email,
    default_email_template
)

from .authors import (
    AuthorsDirectory,
    parse_authors,
    load_authors
)

from .identity import (
    Identity,
    compose_identity,
    decompose_email
)

__all__ = [
    # email utilities
    'EmailTemplate',
    'split_email',
    'default_email_template',

    # authors utilities
    'AuthorsDirectory',
    'parse_authors',
    'load_authors',

    # identity utilities
    'Identity',
    'compose_identity',
    'decompose_email'
]
