"""CLI Argument Parsing"""

import argparse
import argcomplete

from llmc import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='llmc',
        description='Generate a commit message for your staged changes and commit with it',
        epilog='Example: git commit -m "$(llmc --message-only)"'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('--message-only', dest='message_only', action='store_true',
                        help='Generate message only without committing')
    parser.add_argument('--no-commit', dest='message_only', action='store_true',
                        help='Same as --message-only')
    parser.add_argument('--verbose', action='store_true',
                        help='Show diagnostics (provider, attempts, timings) on stderr')

    # Setup/config
    parser.add_argument('--init', action='store_true', help='Create llmc.toml in the current directory')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
