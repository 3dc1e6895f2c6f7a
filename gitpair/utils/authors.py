"""
Loading of the authors file that maps usernames to full names.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterator, Optional

import yaml

from gitpair.core import AuthorsFileUnreadable, UnknownUsername

logger = logging.getLogger(__name__)


class AuthorsDirectory(Mapping):
    """Read-only mapping of username to full name."""

    def __init__(self, authors: Dict[str, str]):
        self._authors = dict(authors)

    def __getitem__(self, username: str) -> str:
        return self._authors[username]

    def __iter__(self) -> Iterator[str]:
        return iter(self._authors)

    def __len__(self) -> int:
        return len(self._authors)

    def __repr__(self) -> str:
        return f"AuthorsDirectory({self._authors!r})"

    def lookup(self, username: str) -> str:
        """Get the full name for a username, matched exactly."""
        try:
            return self._authors[username]
        except KeyError:
            raise UnknownUsername(username) from None


def parse_authors(text: str) -> AuthorsDirectory:
    """Parse YAML text holding a map of usernames to full names."""
    if not text.strip():
        return AuthorsDirectory({})

    data = yaml.safe_load(text)
    if data is None:
        return AuthorsDirectory({})
    if not isinstance(data, dict):
        raise ValueError(f"expected a map of usernames to names, got {type(data).__name__}")

    authors = {}
    for username, name in data.items():
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"expected a full name for username {username}, got {name!r}")
        authors[str(username)] = name
    return AuthorsDirectory(authors)


def describe_yaml_error(error: yaml.YAMLError) -> Optional[str]:
    """Reduce a YAML error to one line with its position, if it has one."""
    if isinstance(error, yaml.MarkedYAMLError) and error.problem:
        mark = error.problem_mark
        if mark is not None:
            return f"{error.problem} (line {mark.line + 1}, column {mark.column + 1})"
        return error.problem
    return None


def load_authors(path) -> AuthorsDirectory:
    """Load the authors directory from a YAML file."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            authors = parse_authors(f.read())
    except yaml.YAMLError as e:
        raise AuthorsFileUnreadable(path, e, describe_yaml_error(e)) from e
    except (OSError, ValueError) as e:
        raise AuthorsFileUnreadable(path, e) from e

    logger.debug("Loaded %d authors from %s", len(authors), path)
    return authors
