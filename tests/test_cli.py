"""
Tests for the CLI surface: flags, early-exit commands, env overrides.

Run with:
    pytest tests/test_cli.py -v
"""

import pytest

from llmc import __version__
from llmc.cli import main as cli_main
from llmc.cli.args import parse_args
from llmc.cli.flow import RunOptions
from llmc.config import Config


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class TestParseArgs:

    @pytest.mark.parametrize("argv, expected", [
        ([], False),
        (["--message-only"], True),
        (["--no-commit"], True),
        (["--no-commit", "--message-only"], True),
    ])
    def test_message_only_flags(self, argv, expected):
        assert parse_args(argv).message_only is expected

    def test_unknown_flag_rejected(self):
        with pytest.raises(SystemExit) as exc:
            parse_args(["--other-flag"])
        assert exc.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            parse_args(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class FakeFlow:
    """Stands in for CommitFlow; records how it was built and run."""

    instances = []

    def __init__(self, config, verbose=False):
        self.config = config
        self.verbose = verbose
        self.display = None
        self.options = None
        FakeFlow.instances.append(self)

    def run(self, options):
        self.options = options
        raise SystemExit(0)


@pytest.fixture
def fake_flow(monkeypatch):
    FakeFlow.instances.clear()
    monkeypatch.setattr(cli_main, "CommitFlow", FakeFlow)
    monkeypatch.setattr(cli_main, "load_config", lambda: Config())
    monkeypatch.delenv("LLMC_PROVIDER", raising=False)
    monkeypatch.delenv("LLMC_MODEL", raising=False)
    return FakeFlow


class TestMain:

    def test_runs_flow_with_message_only(self, fake_flow):
        with pytest.raises(SystemExit):
            cli_main.main(["--no-commit", "--verbose"])

        flow = fake_flow.instances[0]
        assert flow.options == RunOptions(message_only=True)
        assert flow.verbose is True

    def test_default_commits(self, fake_flow):
        with pytest.raises(SystemExit):
            cli_main.main([])
        assert fake_flow.instances[0].options == RunOptions(message_only=False)

    def test_env_overrides(self, fake_flow, monkeypatch):
        monkeypatch.setenv("LLMC_PROVIDER", "ollama")
        monkeypatch.setenv("LLMC_MODEL", "qwen2.5-coder")

        with pytest.raises(SystemExit):
            cli_main.main([])

        config = fake_flow.instances[0].config
        assert config.provider == "ollama"
        assert config.model == "qwen2.5-coder"

    def test_invalid_env_provider_ignored(self, fake_flow, monkeypatch, capsys):
        monkeypatch.setenv("LLMC_PROVIDER", "nope")

        with pytest.raises(SystemExit):
            cli_main.main([])

        assert fake_flow.instances[0].config.provider == "anthropic"
        assert "Ignoring LLMC_PROVIDER=nope" in capsys.readouterr().err

    def test_keyboard_interrupt(self, fake_flow, monkeypatch, capsys):
        def interrupted(self, options):
            raise KeyboardInterrupt
        monkeypatch.setattr(FakeFlow, "run", interrupted)

        assert cli_main.main([]) == 1
        assert "Cancelled." in capsys.readouterr().err


class TestInit:

    def test_creates_config(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        assert cli_main.main(["--init"]) == 0

        assert (tmp_path / "llmc.toml").exists()
        assert "llmc.toml created successfully." in capsys.readouterr().out

    def test_does_not_overwrite(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "llmc.toml").write_text("provider = \"openai\"\n")

        assert cli_main.main(["--init"]) == 1

        assert (tmp_path / "llmc.toml").read_text() == "provider = \"openai\"\n"
        assert "already exists" in capsys.readouterr().err


class TestInstallCompletion:

    def test_prints_register_line(self, monkeypatch, capsys):
        monkeypatch.setenv("SHELL", "/bin/bash")
        assert cli_main.main(["--install-completion"]) == 0
        assert 'register-python-argcomplete llmc' in capsys.readouterr().out
