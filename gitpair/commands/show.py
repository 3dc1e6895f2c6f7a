"""
Command for showing the current pair's git author info.
"""

from gitpair.core import GitConfigFile, ConfigReadFailed, USER_NAME, USER_EMAIL
from gitpair.utils.identity import Identity


def get_current_identity(store: GitConfigFile) -> Identity:
    """Read the author name and email from the config file."""
    values = {}
    for key in (USER_NAME, USER_EMAIL):
        value = store.get(key)
        if value is None:
            raise ConfigReadFailed(store.path, key, "not set")
        values[key] = value

    return Identity(name=values[USER_NAME], email=values[USER_EMAIL])


def show_current_pair(store: GitConfigFile) -> int:
    """Print the current git author as "Name <email>"."""
    print(get_current_identity(store))
    return 0
