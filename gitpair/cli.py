"""
CLI interface for gitpair.
"""

import sys
import argparse
import logging
from typing import Optional, List

from . import __version__
from .core import GitPairError, GitConfigFile, PairRepo, PairSettings, TemplateUnavailable
from .commands.branch import switch_to_pair_branch
from .commands.pair import set_and_show_pair
from .commands.show import show_current_pair
from .utils.authors import load_authors
from .utils.email import EmailTemplate, default_email_template

logger = logging.getLogger(__name__)

DESCRIPTION = """\
Configures your git author and committer info by changing ~/.gitconfig_local.
This is meant to be used both as a means of adding multiple authors to a commit
and an alternative to editing your ~/.gitconfig (which is checked into git)."""

EPILOG = """\
examples:
  # configure paired git author info for this shell
  $ pair jsmith alice
  Alice Barns and Jon Smith <git+alice+jsmith@example.com>

  # use the same author info as the last time pair was run
  $ pair
  Alice Barns and Jon Smith <git+alice+jsmith@example.com>

  # create a branch to work on a feature
  $ pair -b ONCALL-843
  Switched to a new branch 'alice+jsmith/ONCALL-843'

configuration:
  PAIR_FILE         YAML file with a map of usernames to full names (default: ~/.pairs).
  PAIR_GIT_CONFIG   Git config file for reading and writing author info (default: ~/.gitconfig_local).
  PAIR_BASE_BRANCH  Branch that new pair branches start from (default: master)."""


class PairArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")

    def format_help(self) -> str:
        # The default template needs a DNS lookup, so only do it when help is shown.
        try:
            default = f" (default: {default_email_template()})"
        except TemplateUnavailable:
            default = ""
        email_help = f"  PAIR_EMAIL        Email address to base derived email addresses on{default}.\n"
        return super().format_help() + email_help


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = PairArgumentParser(
        prog='pair',
        usage='%(prog)s USER1 [USER2 ...]\n       %(prog)s [-b BRANCH]',
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '-b',
        dest='branch',
        metavar='BRANCH',
        help='Switch to a git branch prefixed with the paired usernames'
    )

    parser.add_argument(
        'usernames',
        nargs='*',
        metavar='USER',
        help='Usernames from the authors file to pair with'
    )

    return parser


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, including debug records when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr
    )


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()
    parsed_args = parser.parse_args(args)
    configure_logging(parsed_args.verbose)

    try:
        settings = PairSettings.from_environ()
        store = GitConfigFile(settings.config_file)

        # Dispatch to the mode selected by the arguments
        if parsed_args.branch:
            return handle_branch(settings, store, parsed_args)
        elif parsed_args.usernames:
            return handle_pair(settings, store, parsed_args)
        else:
            return show_current_pair(store)

    except GitPairError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


def handle_pair(settings: PairSettings, store: GitConfigFile, args) -> int:
    """Handle setting a new pair."""
    template = EmailTemplate.parse(settings.resolve_email_template())
    authors = load_authors(settings.pairs_file)
    return set_and_show_pair(store, authors, template, args.usernames)


def handle_branch(settings: PairSettings, store: GitConfigFile, args) -> int:
    """Handle switching to a pair branch."""
    if args.usernames:
        logger.debug("Ignoring usernames with -b: %s", args.usernames)

    template = EmailTemplate.parse(settings.resolve_email_template())
    switch_to_pair_branch(store, template, args.branch, PairRepo, settings.base_branch)
    return 0


if __name__ == '__main__':
    sys.exit(main())
