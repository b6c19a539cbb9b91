"""Tests for the CLI entry point."""

import subprocess
from unittest.mock import MagicMock

from click.testing import CliRunner

from ghr_cli.auth import resolve_github_token
from ghr_cli.cli import _build_store, main
from ghr_core.gh.models import PullRequestInfo, ReviewRequest
from ghr_store.file import FileSessionStore
from ghr_store.noop import NoOpSessionStore


def _make_config(github_token="tok", repo="octo/app", gemini_key=None):
    return {
        "github_token": github_token,
        "repo": repo,
        "assistant": "gemini",
        "assistant_model": None,
        "assistant_temperature": None,
        "assistant_timeout": 30,
        "gemini_api_key": gemini_key,
        "anthropic_api_key": None,
        "openai_api_key": None,
        "history_max_size": 100,
        "pr_list_limit": 50,
        "session_file": ".ghr_session",
        "history_file": ".ghr_command_history",
    }


def _patch_common(mocker, config=None, token="tok"):
    """Patch load_config, resolve_github_token, and _build_store for most tests."""
    cfg = config or _make_config()
    load = mocker.patch("ghr_core.config.load_config", return_value=cfg)
    mocker.patch("ghr_cli.auth.resolve_github_token", return_value=token)
    mocker.patch("ghr_cli.cli._build_store", return_value=NoOpSessionStore())
    return cfg, load


class TestCLIValidation:
    def test_missing_github_token(self, mocker):
        _patch_common(mocker, config=_make_config(github_token=None), token=None)

        result = CliRunner().invoke(main, ["prs"])
        assert result.exit_code != 0
        assert "No GitHub token found" in result.output

    def test_invalid_config_is_a_usage_error(self, mocker):
        mocker.patch("ghr_core.config.load_config", side_effect=ValueError("must contain a mapping"))
        result = CliRunner().invoke(main, ["prs"])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_repo_cannot_be_determined(self, mocker):
        _patch_common(mocker, config=_make_config(repo=None))
        mocker.patch("ghr_core.gh.cli.detect_repo", return_value=None)

        result = CliRunner().invoke(main, ["prs"])
        assert result.exit_code != 0
        assert "Could not determine the repository" in result.output

    def test_repo_option_passed_as_override(self, mocker):
        _, load = _patch_common(mocker)
        mocker.patch("ghr_cli.commands.prs.get_repo", return_value=MagicMock())
        mocker.patch("ghr_cli.commands.prs.list_pull_requests", return_value=[])

        CliRunner().invoke(main, ["--repo", "octo/other", "--config", "custom.yml", "prs"])

        load.assert_called_once_with("custom.yml", cli_overrides={"repo": "octo/other"})

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "ghr" in result.output


class TestBuildStore:
    def test_ephemeral_uses_noop(self):
        assert isinstance(_build_store(_make_config(), ephemeral=True), NoOpSessionStore)

    def test_default_uses_configured_files(self):
        config = _make_config()
        config["session_file"] = "/tmp/s.json"
        store = _build_store(config)
        assert isinstance(store, FileSessionStore)
        assert str(store.session_path) == "/tmp/s.json"
        assert str(store.history_path) == ".ghr_command_history"


class TestShellCommand:
    def test_default_command_runs_the_shell(self, mocker):
        _patch_common(mocker)
        mock_gh = mocker.patch("ghr_cli.commands.shell.get_github")
        mock_shell_cls = mocker.patch("ghr_cli.commands.shell.ReviewShell")

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 0, result.output
        mock_gh.assert_called_once_with("tok")
        mock_gh.return_value.get_repo.assert_called_once_with("octo/app")
        kwargs = mock_shell_cls.call_args.kwargs
        assert kwargs["repo_name"] == "octo/app"
        assert kwargs["assistant"] is None
        assert isinstance(kwargs["store"], NoOpSessionStore)
        mock_shell_cls.return_value.run.assert_called_once()

    def test_assistant_import_error_disables_assistant(self, mocker):
        _patch_common(mocker, config=_make_config(gemini_key="g"))
        mocker.patch("ghr_cli.commands.shell.get_github")
        mocker.patch("ghr_cli.commands.shell.build_assistant", side_effect=ImportError("pip install 'ghr[gemini]'"))
        mock_shell_cls = mocker.patch("ghr_cli.commands.shell.ReviewShell")

        result = CliRunner().invoke(main, ["shell"])

        assert result.exit_code == 0, result.output
        assert "AI assistant disabled" in result.output
        assert mock_shell_cls.call_args.kwargs["assistant"] is None


class TestListCommands:
    def test_prs_table(self, mocker):
        _patch_common(mocker)
        mocker.patch("ghr_cli.commands.prs.get_repo", return_value=MagicMock())
        mock_list = mocker.patch(
            "ghr_cli.commands.prs.list_pull_requests",
            return_value=[PullRequestInfo(number=42, title="Fix login", state="open", author="alice", url="u")],
        )

        result = CliRunner().invoke(main, ["prs", "--limit", "5"])

        assert result.exit_code == 0, result.output
        assert "#42" in result.output
        assert "Fix login" in result.output
        assert mock_list.call_args.kwargs == {"limit": 5, "state": "open"}

    def test_prs_empty(self, mocker):
        _patch_common(mocker)
        mocker.patch("ghr_cli.commands.prs.get_repo", return_value=MagicMock())
        mocker.patch("ghr_cli.commands.prs.list_pull_requests", return_value=[])

        result = CliRunner().invoke(main, ["prs"])
        assert "No open pull requests found" in result.output

    def test_requests_passes_filters(self, mocker):
        _patch_common(mocker)
        mocker.patch("ghr_cli.commands.requests.get_github")
        mock_search = mocker.patch(
            "ghr_cli.commands.requests.search_review_requests",
            return_value=[ReviewRequest(repository="octo/app", number=3, title="Add cache", url="u")],
        )

        result = CliRunner().invoke(main, ["requests", "--state", "any", "--repo", "octo/*"])

        assert result.exit_code == 0, result.output
        assert "Add cache" in result.output
        kwargs = mock_search.call_args.kwargs
        assert kwargs["state"] == "any"
        assert kwargs["repo"] == "octo/*"
        assert kwargs["reviewer"] == "@me"


class TestResolveGithubToken:
    def test_prefers_github_token(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-tok")
        monkeypatch.setenv("GH_TOKEN", "gh-tok")
        assert resolve_github_token() == "env-tok"

    def test_gh_token_env(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("GH_TOKEN", "gh-tok")
        assert resolve_github_token() == "gh-tok"

    def test_falls_back_to_gh_cli(self, monkeypatch, mocker):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("GH_TOKEN", raising=False)
        mocker.patch(
            "ghr_core.gh.cli.subprocess.run",
            return_value=MagicMock(returncode=0, stdout="cli-tok\n"),
        )
        assert resolve_github_token() == "cli-tok"

    def test_returns_none_when_gh_missing(self, monkeypatch, mocker):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("GH_TOKEN", raising=False)
        mocker.patch("ghr_core.gh.cli.subprocess.run", side_effect=FileNotFoundError)
        assert resolve_github_token() is None

    def test_returns_none_on_timeout(self, monkeypatch, mocker):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("GH_TOKEN", raising=False)
        mocker.patch("ghr_core.gh.cli.subprocess.run", side_effect=subprocess.TimeoutExpired("gh", 5))
        assert resolve_github_token() is None
