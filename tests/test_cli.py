"""
Tests for CLI commands — global options, install, iam, check.

Service calls are patched at their home modules; the commands import
them lazily, so the patches are seen at call time.
"""

import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cloudtools.core.errors import ApiError, HttpError, UnsupportedPlatform
from cloudtools.core.models.install import BatchResult, InstallOutcome, Platform
from cloudtools.main import cli

_INSTALL_BINARY = "cloudtools.core.services.tool_install.execution.installer.install_binary"
_INSTALL_PLUGIN = "cloudtools.core.services.tool_install.execution.plugins.install_plugin"
_INSTALL_MANY = "cloudtools.core.services.tool_install.orchestration.orchestrator.install_many"
_INSTALL_REQUESTS = (
    "cloudtools.core.services.tool_install.orchestration.orchestrator.install_requests"
)
_TOKEN = "cloudtools.core.services.iam.request_bearer_token"
_PLATFORM = "cloudtools.core.services.tool_install.detection.platform.detect_platform"


@pytest.fixture
def runner(isolated_env) -> CliRunner:
    return CliRunner()


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "cloudtools.yml"
    path.write_text(textwrap.dedent(body))
    return path


class TestCLIGlobal:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "IBM Cloud" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_unparseable_verbose_env_is_ignored(self, runner):
        result = runner.invoke(cli, ["check", "bool", "true"], env={"VERBOSE": "1"})
        assert result.exit_code == 0
        assert "Ignoring VERBOSE='1'" in result.stderr

    def test_verbose_env_true(self, runner):
        result = runner.invoke(cli, ["check", "bool", "true"], env={"VERBOSE": "true"})
        assert result.exit_code == 0
        assert "Ignoring" not in result.stderr

    def test_install_help_lists_artifacts(self, runner):
        result = runner.invoke(cli, ["install", "--help"])
        assert result.exit_code == 0
        for name in ("jq", "kubectl", "ibmcloud", "plugin", "plugins", "all"):
            assert name in result.output


class TestInstallBinaryCommand:
    def test_success_writes_nothing_to_stdout(self, runner, tmp_path):
        outcome = InstallOutcome.installed("jq", path=str(tmp_path / "jq"))
        with patch(_INSTALL_BINARY, return_value=outcome) as install:
            result = runner.invoke(
                cli,
                ["install", "jq", "--version", "v1.8.1", "--location", str(tmp_path),
                 "--skip-if-detected", "false", "--sudo", "false"],
            )

        assert result.exit_code == 0
        assert result.stdout == ""
        assert "Installed jq" in result.stderr
        request = install.call_args.args[0]
        assert request.artifact == "jq"
        assert request.version == "v1.8.1"
        assert request.location == str(tmp_path)
        assert request.skip_if_detected is False
        assert install.call_args.kwargs["escalate"] is False

    def test_defaults(self, runner):
        with patch(_INSTALL_BINARY, return_value=InstallOutcome.skipped("kubectl")) as install:
            result = runner.invoke(cli, ["install", "kubectl"])
        assert result.exit_code == 0
        assert "already installed" in result.stderr
        request = install.call_args.args[0]
        assert request.version == "latest"
        assert request.location == "/usr/local/bin"
        assert request.skip_if_detected is True
        assert install.call_args.kwargs["escalate"] is None

    def test_config_install_dir(self, runner, tmp_path):
        config = _write_config(tmp_path, """\
            install_dir: /opt/tools/bin
            skip_if_detected: false
        """)
        with patch(_INSTALL_BINARY, return_value=InstallOutcome.installed("jq")) as install:
            result = runner.invoke(cli, ["--config", str(config), "install", "jq"])
        assert result.exit_code == 0
        request = install.call_args.args[0]
        assert request.location == "/opt/tools/bin"
        assert request.skip_if_detected is False

    def test_bad_boolean_is_usage_error(self, runner):
        with patch(_INSTALL_BINARY) as install:
            result = runner.invoke(cli, ["install", "jq", "--skip-if-detected", "yes"])
        assert result.exit_code == 2
        assert "Only 'true' or 'false' is supported" in result.stderr
        install.assert_not_called()

    def test_failed_outcome_exits_1(self, runner):
        outcome = InstallOutcome.failed("jq", "Failed to download x: HTTP 404")
        with patch(_INSTALL_BINARY, return_value=outcome):
            result = runner.invoke(cli, ["install", "jq"])
        assert result.exit_code == 1
        assert "HTTP 404" in result.stderr
        assert result.stdout == ""

    def test_raised_error_uses_its_exit_code(self, runner):
        with patch(_INSTALL_BINARY, side_effect=UnsupportedPlatform("Unsupported OS: win32")):
            result = runner.invoke(cli, ["install", "ibmcloud"])
        assert result.exit_code == 1
        assert "Unsupported OS" in result.stderr

    def test_invalid_config_is_usage_error(self, runner, tmp_path):
        config = _write_config(tmp_path, "skip_if_detected: maybe\n")
        with patch(_INSTALL_BINARY) as install:
            result = runner.invoke(cli, ["--config", str(config), "install", "jq"])
        assert result.exit_code == 2
        install.assert_not_called()

    def test_malformed_url_is_usage_error(self, runner, tmp_path):
        result = runner.invoke(
            cli,
            ["install", "jq", "--url", "not-a-url", "--location", str(tmp_path),
             "--skip-if-detected", "false", "--sudo", "false"],
        )
        assert result.exit_code == 2
        assert "Invalid download URL" in result.stderr
        assert isinstance(result.exception, SystemExit)


class TestInstallPluginCommands:
    def test_plugin_home_from_env(self, runner):
        with patch(_INSTALL_PLUGIN, return_value=InstallOutcome.installed("cr")) as install:
            result = runner.invoke(
                cli, ["install", "plugin", "cr", "--version", "1.3.10"],
                env={"IBMCLOUD_HOME": "/env/home"},
            )
        assert result.exit_code == 0
        request = install.call_args.args[0]
        assert request.kind == "plugin"
        assert request.version == "1.3.10"
        assert request.plugin_home == "/env/home"

    def test_plugin_home_option_wins(self, runner):
        with patch(_INSTALL_PLUGIN, return_value=InstallOutcome.installed("cr")) as install:
            runner.invoke(
                cli, ["install", "plugin", "cr", "--plugin-home", "/cli/home"],
                env={"IBMCLOUD_HOME": "/env/home"},
            )
        assert install.call_args.args[0].plugin_home == "/cli/home"

    def test_plugins_partial_failure(self, runner):
        batch = BatchResult(outcomes=[
            InstallOutcome.installed("cloud-object-storage"),
            InstallOutcome.skipped("container-registry"),
            InstallOutcome.failed("nope", "Failed to install plugin 'nope': exited 1"),
        ])
        with patch(_INSTALL_MANY, return_value=batch) as install_many:
            result = runner.invoke(
                cli, ["install", "plugins", "cloud-object-storage", "container-registry", "nope"],
            )
        assert result.exit_code == 1
        assert "Installed: 1  Skipped: 1  Failed: 1" in result.stderr
        assert result.stdout == ""
        names, options = install_many.call_args.args
        assert list(names) == ["cloud-object-storage", "container-registry", "nope"]
        assert options.kind == "plugin"

    def test_plugins_all_ok(self, runner):
        batch = BatchResult(outcomes=[InstallOutcome.installed("a")])
        with patch(_INSTALL_MANY, return_value=batch):
            result = runner.invoke(cli, ["install", "plugins", "a"])
        assert result.exit_code == 0

    def test_plugins_requires_names(self, runner):
        result = runner.invoke(cli, ["install", "plugins"])
        assert result.exit_code == 2


class TestInstallAll:
    def test_from_config(self, runner, tmp_path):
        config = _write_config(tmp_path, """\
            install_dir: /opt/tools/bin
            plugin_home: /opt/ibmcloud
            tools:
              - jq
              - name: kubectl
                version: v1.34.2
                location: /usr/bin
            plugins:
              - cloud-object-storage
        """)
        batch = BatchResult(outcomes=[
            InstallOutcome.installed(n) for n in ("jq", "kubectl", "cloud-object-storage")
        ])
        with patch(_INSTALL_REQUESTS, return_value=batch) as install_requests:
            result = runner.invoke(
                cli, ["--config", str(config), "install", "all", "--skip-if-detected", "false"],
            )

        assert result.exit_code == 0
        requests = install_requests.call_args.args[0]
        assert [(r.artifact, r.kind) for r in requests] == [
            ("jq", "binary"), ("kubectl", "binary"), ("cloud-object-storage", "plugin"),
        ]
        assert requests[0].location == "/opt/tools/bin"
        assert requests[1].location == "/usr/bin"
        assert requests[1].version == "v1.34.2"
        assert requests[2].plugin_home == "/opt/ibmcloud"
        assert all(r.skip_if_detected is False for r in requests)

    def test_empty_manifest(self, runner):
        result = runner.invoke(cli, ["install", "all"])
        assert result.exit_code == 2
        assert "No tools or plugins" in result.stderr


class TestIamToken:
    def test_missing_key(self, runner):
        with patch(_TOKEN) as request:
            result = runner.invoke(cli, ["iam", "token"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "IBMCLOUD_API_KEY" in result.stderr
        request.assert_not_called()

    def test_prints_only_the_token(self, runner):
        with patch(_TOKEN, return_value="tok-123") as request:
            result = runner.invoke(cli, ["iam", "token"], env={"IBMCLOUD_API_KEY": "k"})
        assert result.exit_code == 0
        assert result.stdout == "tok-123\n"
        request.assert_called_once_with("k", "https://iam.cloud.ibm.com")

    def test_endpoint_from_env(self, runner):
        env = {"IBMCLOUD_API_KEY": "k", "IBMCLOUD_IAM_API_ENDPOINT": "https://iam.test.cloud.ibm.com"}
        with patch(_TOKEN, return_value="tok") as request:
            runner.invoke(cli, ["iam", "token"], env=env)
        request.assert_called_once_with("k", "https://iam.test.cloud.ibm.com")

    def test_api_error(self, runner):
        with patch(_TOKEN, side_effect=ApiError("Provided API key could not be found.")):
            result = runner.invoke(cli, ["iam", "token", "--api-key", "bad"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "could not be found" in result.stderr

    def test_http_error_shows_body(self, runner):
        with patch(_TOKEN, side_effect=HttpError(400, '{"errorCode": "BXNIM0415E"}')):
            result = runner.invoke(cli, ["iam", "token", "--api-key", "bad"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "HTTP 400" in result.stderr
        assert "BXNIM0415E" in result.stderr


class TestCheckCommands:
    def test_bool_valid(self, runner):
        result = runner.invoke(cli, ["check", "bool", "True"])
        assert result.exit_code == 0

    def test_bool_invalid(self, runner):
        result = runner.invoke(cli, ["check", "bool", "yes"])
        assert result.exit_code == 1
        assert "Found: yes" in result.stderr

    def test_env(self, runner, monkeypatch):
        monkeypatch.setenv("CT_PRESENT", "")
        monkeypatch.delenv("CT_ABSENT", raising=False)
        result = runner.invoke(cli, ["check", "env", "CT_PRESENT", "CT_ABSENT"])
        assert result.exit_code == 1
        assert "CT_ABSENT" in result.stderr
        assert "CT_PRESENT" not in result.stderr

    def test_env_needs_names(self, runner):
        result = runner.invoke(cli, ["check", "env"])
        assert result.exit_code == 2

    def test_bins(self, runner):
        with patch("shutil.which", side_effect=lambda n: "/bin/sh" if n == "sh" else None):
            ok = runner.invoke(cli, ["check", "bins", "sh"])
            missing = runner.invoke(cli, ["check", "bins", "sh", "no-such-tool"])
        assert ok.exit_code == 0
        assert missing.exit_code == 1
        assert "no-such-tool" in missing.stderr

    def test_platform(self, runner):
        with patch(_PLATFORM, return_value=Platform(os="linux", arch="arm64")):
            result = runner.invoke(cli, ["check", "platform"])
        assert result.exit_code == 0
        assert result.stdout == "linux/arm64\n"

    def test_platform_unsupported(self, runner):
        with patch(_PLATFORM, side_effect=UnsupportedPlatform("Unsupported OS: win32")):
            result = runner.invoke(cli, ["check", "platform"])
        assert result.exit_code == 1
        assert result.stdout == ""
