"""Tests for the folio CLI."""

import json

import pytest
import responses
from typer.testing import CliRunner

from projectfolio.cli.main import app
from projectfolio.config import Config


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Leave logging handlers alone and give rich a wide terminal."""
    monkeypatch.setattr("projectfolio.cli.main.configure_logging", lambda verbose=False: None)
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def project_dir(tmp_path, monkeypatch, api_url):
    """An initialized project pointing at the mocked endpoint."""
    config = Config(tmp_path)
    data = config.init_project(owner="octocat")
    data.api_url = api_url
    data.max_retries = 0
    config.save(data)
    monkeypatch.setenv("FOLIO_PROJECT_DIR", str(tmp_path))
    (tmp_path / "data" / "manual").mkdir(parents=True)
    return tmp_path


class TestBasicCommands:
    def test_version(self, runner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "projectfolio version" in result.stdout

    def test_no_subcommand_shows_help(self, runner):
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "build" in result.stdout

    def test_init(self, runner, tmp_path):
        result = runner.invoke(app, ["init", str(tmp_path), "--owner", "octocat"])

        assert result.exit_code == 0
        assert "Initialized" in result.stdout
        assert Config(tmp_path).load().owner == "octocat"

    def test_init_twice_fails(self, runner, tmp_path):
        runner.invoke(app, ["init", str(tmp_path)])
        result = runner.invoke(app, ["init", str(tmp_path)])

        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_missing_config(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("FOLIO_PROJECT_DIR", str(tmp_path))
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "folio init" in result.stdout

    def test_status(self, runner, project_dir, monkeypatch):
        monkeypatch.setenv("GH_TOKEN", "secret")
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "octocat" in result.stdout
        assert "GH_TOKEN=***" in result.stdout
        assert "secret" not in result.stdout


class TestValidate:
    def test_valid_records(self, runner, project_dir):
        (project_dir / "data" / "manual" / "foo.yml").write_text("title: Foo\nsource: local\n")

        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 0
        assert "Included: 1" in result.stdout
        assert "1 local projects would be published" in result.stdout

    def test_invalid_record_fails(self, runner, project_dir):
        (project_dir / "data" / "manual" / "bad.yml").write_text("source: local\n")

        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 1
        assert "bad.yml: Missing required field: title" in result.stdout


class TestBuild:
    def test_missing_token_is_fatal(self, runner, project_dir):
        result = runner.invoke(app, ["build"])

        assert result.exit_code == 1
        assert "GH_TOKEN" in result.stdout
        assert not (project_dir / "public").exists()

    @responses.activate
    def test_build_writes_artifact(
        self, runner, project_dir, monkeypatch, api_url, identity, node, listing
    ):
        monkeypatch.setenv("GH_TOKEN", "secret")
        responses.add(responses.POST, api_url, json=identity, status=200)
        responses.add(
            responses.POST,
            api_url,
            json=listing([node("alpha", topics=["portfolio:complete"])]),
            status=200,
        )
        (project_dir / "data" / "manual" / "foo.yml").write_text("title: Foo\nsource: local\n")

        result = runner.invoke(app, ["build"])

        assert result.exit_code == 0, result.stdout
        assert "Total projects: 2" in result.stdout
        artifact = project_dir / "public" / "data" / "projects.json"
        assert [r["slug"] for r in json.loads(artifact.read_text())] == ["foo", "alpha"]

    @responses.activate
    def test_dry_run_does_not_write(
        self, runner, project_dir, monkeypatch, api_url, listing
    ):
        monkeypatch.setenv("GH_TOKEN", "secret")
        responses.add(responses.POST, api_url, json=listing([]), status=200)

        result = runner.invoke(app, ["build", "--dry-run", "--skip-check"])

        assert result.exit_code == 0
        assert "Dry run" in result.stdout
        assert not (project_dir / "public").exists()

    @responses.activate
    def test_auth_failure(self, runner, project_dir, monkeypatch, api_url):
        monkeypatch.setenv("GH_TOKEN", "bad")
        responses.add(responses.POST, api_url, json={}, status=401)

        result = runner.invoke(app, ["build"])

        assert result.exit_code == 1
        assert "Build failed" in result.stdout


class TestCheck:
    @responses.activate
    def test_check_ok(self, runner, project_dir, monkeypatch, api_url, identity):
        monkeypatch.setenv("GH_TOKEN", "secret")
        responses.add(responses.POST, api_url, json=identity, status=200)

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "as octocat" in result.stdout

    def test_check_without_token(self, runner, project_dir):
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 1


class TestShow:
    def test_show_lists_projects(self, runner, project_dir):
        artifact = project_dir / "projects.json"
        artifact.write_text(
            json.dumps(
                [
                    {
                        "slug": "alpha",
                        "title": "Alpha",
                        "source": "remote",
                        "status": "complete",
                        "tier": "flagship",
                        "visibility": "portfolio",
                        "domains": ["saas"],
                        "pushedAt": "2024-01-01T00:00:00Z",
                    },
                    {
                        "slug": "beta",
                        "title": "Beta",
                        "source": "local",
                        "status": "in-progress",
                        "tier": "mvp",
                        "visibility": "labs",
                        "pushedAt": "2024-01-01T00:00:00Z",
                    },
                ]
            )
        )

        result = runner.invoke(app, ["show", "--artifact", str(artifact)])
        assert result.exit_code == 0
        assert "alpha" in result.stdout
        assert "beta" in result.stdout

        result = runner.invoke(app, ["show", "--artifact", str(artifact), "--domain", "saas"])
        assert "alpha" in result.stdout
        assert "beta" not in result.stdout

        result = runner.invoke(
            app, ["show", "--artifact", str(artifact), "--status", "in-progress", "--visibility", "labs"]
        )
        assert result.exit_code == 0
        assert "beta" in result.stdout
        assert "alpha" not in result.stdout

    def test_show_missing_artifact(self, runner, project_dir):
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 1
        assert "folio build" in result.stdout
