import os
import sys

import pytest

from natively import main as cli
from natively.core.config import PROFILES, Settings

DEFAULTS = PROFILES["campx"]


def test_no_arguments_prints_summary_and_sets_environment(clean_env, capsys):
    assert cli.main(["--profile", "campx"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Environment variables set:"] + [f"{key}={value}" for key, value in DEFAULTS.items()]
    for key, value in DEFAULTS.items():
        assert os.environ[key] == value


def test_flags_override_set_and_env_file(clean_env, tmp_path, capsys):
    env_file = tmp_path / "override.env"
    env_file.write_text("REDIS_HOST=from-file\nREDIS_PORT=1111\nMESHES_DIR=/file/meshes\n")

    code = cli.main([
        "--profile", "campx",
        "--env-file", str(env_file),
        "--set", "REDIS_PORT=2222",
        "--set", "SCENARIO_DIR=/set/scenario",
        "--redis-port", "3333",
    ])

    assert code == 0
    assert os.environ["REDIS_HOST"] == "from-file"
    assert os.environ["REDIS_PORT"] == "3333"
    assert os.environ["MESHES_DIR"] == "/file/meshes"
    assert os.environ["SCENARIO_DIR"] == "/set/scenario"


def test_inherit_uses_existing_environment(clean_env, capsys):
    clean_env.setenv("REDIS_HOST", "inherited")
    assert cli.main(["--profile", "campx"]) == 0
    assert os.environ["REDIS_HOST"] == DEFAULTS["REDIS_HOST"]

    clean_env.setenv("REDIS_HOST", "inherited")
    assert cli.main(["--profile", "campx", "--inherit"]) == 0
    assert os.environ["REDIS_HOST"] == "inherited"


def test_export_mode_moves_summary_to_stderr(clean_env, capsys):
    assert cli.main(["--profile", "campx", "--export", "--redis-host", "10.0.0.5"]) == 0

    captured = capsys.readouterr()
    out = captured.out.splitlines()
    assert len(out) == 4
    assert out[2] == "export REDIS_HOST=10.0.0.5"
    assert captured.err.splitlines()[0] == "Environment variables set:"


def test_strict_empty_value_exits_with_usage_error(clean_env, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--strict", "--redis-host", ""])

    assert excinfo.value.code == 2
    assert "REDIS_HOST" in capsys.readouterr().err
    assert "REDIS_HOST" not in os.environ


def test_malformed_assignment_exits_with_usage_error(clean_env, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--set", "REDIS_PORT"])
    assert excinfo.value.code == 2


def test_check_passes(clean_env, tmp_path, monkeypatch, capsys):
    (tmp_path / "meshes").mkdir()
    (tmp_path / "scenario").mkdir()
    probed = []
    monkeypatch.setattr(cli, "check_connection", lambda host, port: probed.append((host, port)) or True)

    code = cli.main([
        "--check",
        "--meshes-dir", str(tmp_path / "meshes"),
        "--scenario-dir", str(tmp_path / "scenario"),
    ])

    assert code == 0
    assert probed == [(os.environ["REDIS_HOST"], os.environ["REDIS_PORT"])]


def test_check_fails_on_missing_directory(clean_env, tmp_path, monkeypatch, caplog, capsys):
    monkeypatch.setattr(cli, "check_connection", lambda host, port: True)

    code = cli.main(["--check", "--meshes-dir", str(tmp_path / "absent"), "--scenario-dir", str(tmp_path)])

    assert code == cli.EXIT_CHECK_FAILED
    assert "MESHES_DIR" in caplog.text
    assert not (tmp_path / "absent").exists()


def test_command_runs_with_published_environment(clean_env, capsys):
    script = "import os, sys; sys.exit(0 if os.environ['REDIS_PORT'] == '7000' else 1)"
    assert cli.main(["--redis-port", "7000", "--", sys.executable, "-c", script]) == 0


def test_command_exit_code_is_propagated(clean_env, capsys):
    assert cli.main(["--", sys.executable, "-c", "import sys; sys.exit(5)"]) == 5


def test_missing_command(clean_env, capsys):
    assert cli.main(["--", "definitely-not-a-real-command-xyz"]) == cli.EXIT_COMMAND_NOT_FOUND


def test_lowercase_log_level_setting_still_exits_zero(clean_env, monkeypatch, capsys):
    monkeypatch.setenv("NATIVELY_LOG_LEVEL", "info")
    monkeypatch.setattr(cli, "settings", Settings())

    assert cli.main(["--profile", "campx"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Environment variables set:"


def test_log_level_flag_is_case_insensitive(clean_env, capsys):
    assert cli.main(["--profile", "campx", "--log-level", "debug"]) == 0


def test_no_strict_overrides_strict_setting(clean_env, monkeypatch, capsys):
    monkeypatch.setenv("NATIVELY_STRICT", "true")
    monkeypatch.setattr(cli, "settings", Settings())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--redis-host", ""])
    assert excinfo.value.code == 2

    assert cli.main(["--no-strict", "--redis-host", ""]) == 0
    assert os.environ["REDIS_HOST"] == ""


def test_check_fails_when_redis_is_unreachable(clean_env, tmp_path, monkeypatch, caplog, capsys):
    monkeypatch.setattr(cli, "check_connection", lambda host, port: False)
    script = "import sys; sys.exit(0)"

    code = cli.main([
        "--check",
        "--meshes-dir", str(tmp_path),
        "--scenario-dir", str(tmp_path),
        "--redis-host", "10.0.0.5",
        "--", sys.executable, "-c", script,
    ])

    assert code == cli.EXIT_CHECK_FAILED
    assert "Redis is not reachable at 10.0.0.5" in caplog.text
