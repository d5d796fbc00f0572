"""CLI Main Entry Point"""

import os
import sys

from llmc.config import Config, VALID_PROVIDERS, load_config
from llmc.output import print_warning

from llmc.cli.args import parse_args
from llmc.cli.commands import display_config, run_init, run_install_completion
from llmc.cli.flow import CommitFlow, RunOptions


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.init:
        return run_init(), True
    if args.display_config:
        return display_config(), True
    return 0, False


def _apply_env_overrides(config: Config) -> Config:
    """Precedence: environment variables > config file > defaults."""
    provider = os.environ.get('LLMC_PROVIDER')
    if provider:
        if provider in VALID_PROVIDERS:
            config.provider = provider
        else:
            print_warning(f"Ignoring LLMC_PROVIDER={provider}: must be one of {', '.join(VALID_PROVIDERS)}")
    model = os.environ.get('LLMC_MODEL')
    if model:
        config.model = model
    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    config = _apply_env_overrides(load_config())
    flow = CommitFlow(config, verbose=args.verbose)
    try:
        flow.run(RunOptions(message_only=args.message_only))
    except KeyboardInterrupt:
        if flow.display is not None:
            flow.display.stop()
        print("\nCancelled.", file=sys.stderr)
        return 1


def run() -> None:
    sys.exit(main())
