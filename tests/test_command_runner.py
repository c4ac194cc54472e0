from __future__ import annotations

from pathlib import Path

import click
import pytest

from flutter_tools.commands.registry import default_commands
from flutter_tools.runner.command_runner import FlutterCommandRunner
from flutter_tools.runner.invocation import CommandPath, CommandPathKind
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import COMPLETE_ENV, Platform

from tests.fakes import FlutterEnv, environ_scope


def _runner(env: FlutterEnv, **kwargs: object) -> FlutterCommandRunner:
    runner = FlutterCommandRunner(cwd=env.cwd, **kwargs)
    for name, command in default_commands().items():
        runner.add_command(command, name)
    runner.add_command(env.probe_command())
    return runner


def test_parse_resolves_flags_and_command_path(flutter_env: FlutterEnv) -> None:
    parsed = _runner(flutter_env).parse(["-v", "--no-color", "-d", "pixel", "probe"])
    assert parsed["verbose"] is True
    assert parsed["color"] is False
    assert parsed["device-id"] == "pixel"
    assert parsed["wrap"] is True
    assert parsed.was_parsed("color")
    assert parsed.was_parsed("device-id")
    assert not parsed.was_parsed("wrap")
    assert parsed.command_path == CommandPath(("probe",))
    assert parsed.command_name == "probe"


def test_parse_nested_command_path(flutter_env: FlutterEnv) -> None:
    parsed = _runner(flutter_env).parse(["build", "apk", "--debug"])
    assert parsed.command_path.names == ("build", "apk")
    assert parsed.command_path.kind is CommandPathKind.NESTED
    assert [ctx.info_name for ctx in parsed.contexts] == ["flutter", "build", "apk"]


def test_parse_without_command_is_root(flutter_env: FlutterEnv) -> None:
    parsed = _runner(flutter_env).parse(["--quiet"])
    assert parsed.command_path.kind is CommandPathKind.ROOT
    assert parsed.command_name is None
    assert parsed["quiet"] is True


def test_parsed_invocation_is_read_only(flutter_env: FlutterEnv) -> None:
    parsed = _runner(flutter_env).parse(["probe"])
    with pytest.raises(TypeError):
        parsed.flags["verbose"] = True  # type: ignore[index]


def test_config_defaults_are_not_explicit(flutter_env: FlutterEnv) -> None:
    runner = _runner(flutter_env, default_map={"version_check": False, "wrap": False})
    parsed = runner.parse(["probe"])
    assert parsed["version-check"] is False
    assert parsed["wrap"] is False
    assert not parsed.was_parsed("version-check")
    assert not parsed.was_parsed("wrap")


def test_hidden_flags_still_parse(flutter_env: FlutterEnv) -> None:
    parsed = _runner(flutter_env).parse(
        ["--machine", "--local-engine", "host_debug", "--show-test-device", "probe"]
    )
    assert parsed["machine"] is True
    assert parsed["local-engine"] == "host_debug"
    assert parsed["show-test-device"] is True


def test_root_usage_error_is_attributed_to_root(flutter_env: FlutterEnv) -> None:
    runner = _runner(flutter_env)
    with pytest.raises(click.UsageError) as info:
        runner.parse(["--bogus", "probe"])
    assert info.value.ctx is not None
    assert info.value.ctx.command is runner.group
    assert info.value.ctx.command_path == "flutter"


def test_unknown_command_is_attributed_to_root(flutter_env: FlutterEnv) -> None:
    runner = _runner(flutter_env)
    with pytest.raises(click.UsageError) as info:
        runner.parse(["frobnicate"])
    assert info.value.ctx is not None
    assert info.value.ctx.command_path == "flutter"


def test_nested_usage_error_is_attributed_to_deepest_command(flutter_env: FlutterEnv) -> None:
    runner = _runner(flutter_env)
    with pytest.raises(click.UsageError) as info:
        runner.parse(["build", "ios", "--bad-flag"])
    assert info.value.ctx is not None
    assert info.value.ctx.command_path == "flutter build ios"
    assert info.value.ctx.command is runner.commands["build"].commands["ios"]


def test_unknown_subcommand_is_attributed_to_its_group(flutter_env: FlutterEnv) -> None:
    runner = _runner(flutter_env)
    with pytest.raises(click.UsageError) as info:
        runner.parse(["build", "windows"])
    assert info.value.ctx is not None
    assert info.value.ctx.command_path == "flutter build"


def test_bare_category_command_is_rewritten_to_help(flutter_env: FlutterEnv) -> None:
    runner = _runner(flutter_env)
    assert runner.requires_subcommand("build")
    assert not runner.requires_subcommand("devices")
    assert runner.rewrite_args(["build"]) == ["build", "-h"]
    assert runner.rewrite_args(["build", "apk"]) == ["build", "apk"]
    assert runner.rewrite_args(["devices"]) == ["devices"]
    assert runner.rewrite_args(["-v", "build"]) == ["-v", "build"]


def test_completion_request_exits_with_candidates(
    flutter_env: FlutterEnv,
    capsys: pytest.CaptureFixture[str],
) -> None:
    runner = _runner(flutter_env)
    platform = flutter_env.platform(**{COMPLETE_ENV: "bash_complete"})
    with context.override_scope({Platform: context.constant(platform)}):
        with environ_scope({"COMP_WORDS": "flutter bui", "COMP_CWORD": "1"}):
            with pytest.raises(click.exceptions.Exit) as info:
                runner.parse(["bui"])
    assert info.value.exit_code == 0
    assert "build" in capsys.readouterr().out


def test_repo_packages_come_from_the_flutter_root(flutter_env: FlutterEnv) -> None:
    package = flutter_env.root / "packages" / "flutter"
    package.mkdir(parents=True)
    (package / "pubspec.yaml").write_text("name: flutter\n", encoding="utf-8")
    runner = _runner(flutter_env)
    assert runner.get_repo_roots() == [
        flutter_env.root / "dev",
        flutter_env.root / "examples",
        flutter_env.root / "packages",
    ]
    assert runner.get_repo_packages() == [package]


def test_runner_cwd_defaults_to_process_cwd(flutter_env: FlutterEnv) -> None:
    assert FlutterCommandRunner().cwd == Path.cwd()
