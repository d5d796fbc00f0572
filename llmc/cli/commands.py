"""CLI Commands"""

import os
import sys

from llmc.config import ConfigError, load_config, get_config_path, init_config
from llmc.llm import resolve_api_key
from llmc.output import bold, dim, info, print_success, print_error


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no llmc.toml found)")

    env_provider = os.environ.get('LLMC_PROVIDER')
    env_model = os.environ.get('LLMC_MODEL')
    if env_provider or env_model:
        print(f"  {dim('Environment overrides:')}")
        if env_provider:
            print(f"    LLMC_PROVIDER={env_provider}")
        if env_model:
            print(f"    LLMC_MODEL={env_model}")

    api_key = 'set' if resolve_api_key(config) else 'not set'

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:    {info(config.provider)}")
    print(f"    model:       {info(config.model or 'provider default')}")
    print(f"    temperature: {info(str(config.temperature))}")
    print(f"    max_tokens:  {info(str(config.max_tokens))}")
    print(f"    prompt:      {info('custom' if config.prompt else 'default')}")
    print(f"    api_key:     {info(api_key)}")
    if config.host:
        print(f"    host:        {info(config.host)}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  llmc.toml (in current directory)")
    print(f"    Global: ~/.llmc.toml")
    print(f"\n  {dim('Run')} llmc --init {dim('to create a local config')}\n")

    return 0


def run_init() -> int:
    """Write a commented llmc.toml into the working directory."""
    try:
        init_config()
    except ConfigError as e:
        print_error(str(e))
        return 1
    print_success("llmc.toml created successfully.")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete llmc)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell llmc | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish llmc | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
