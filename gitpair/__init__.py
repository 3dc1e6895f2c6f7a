"""
gitpair - A Python CLI tool for managing paired-programming git authors.

gitpair rewrites the author identity stored in a local git config file so
that commits are attributed to everyone in the current pair, and creates
branches prefixed with the pair's usernames.
"""

__version__ = "0.1.0"
__author__ = "gitpair"
