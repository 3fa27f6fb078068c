# tests/test_install_devenv.py
"""
End-to-end tests for the install_devenv command-line entry point. Every
external process and the installer download are replaced with mocks.
"""

import subprocess

import pytest

import install_devenv


@pytest.fixture
def workdir(tmp_path, monkeypatch, mocker):
    """Run inside an empty temporary directory with logging setup stubbed."""
    monkeypatch.chdir(tmp_path)
    mocker.patch("install_devenv.setup_logging")
    return tmp_path


@pytest.fixture
def externals(mocker):
    calls = []
    mocks = {
        "download": mocker.patch(
            "provisioning.toolchain.download_installer",
            side_effect=lambda *a, **k: calls.append("download") or "script",
        ),
        "installer": mocker.patch(
            "provisioning.toolchain.run_command",
            side_effect=lambda cmd, *a, **k: calls.append(cmd),
        ),
        "apt_exists": mocker.patch(
            "provisioning.apt.command_exists", return_value=True
        ),
        "apt": mocker.patch(
            "provisioning.apt.run_elevated_command",
            side_effect=lambda cmd, *a, **k: calls.append(cmd),
        ),
    }
    return calls, mocks


def test_parse_args_defaults():
    args = install_devenv.parse_args([])

    assert args.verbose is False
    assert args.config == "devenv.yaml"
    assert args.toolchain_file is None
    assert args.log_file is None


def test_scenario_all_steps_succeed(workdir, externals):
    """Pin 1.75.0, everything succeeds: exit 0, steps in order."""
    calls, _ = externals
    (workdir / "rust-toolchain").write_text("1.75.0\n", encoding="utf-8")

    assert install_devenv.main([]) == 0

    assert calls == [
        "download",
        ["sh", "-s", "--", "-y", "--default-toolchain", "1.75.0"],
        ["apt", "update"],
        ["apt", "install", "-y", "nodejs", "libudev-dev", "pkg-config"],
    ]


def test_scenario_missing_pin_file(workdir, externals):
    """No pin file: non-zero exit, no network call, no apt."""
    calls, mocks = externals

    assert install_devenv.main([]) != 0

    assert calls == []
    mocks["download"].assert_not_called()


def test_scenario_installer_fails(workdir, externals):
    """Installer exits 1: non-zero exit, no package-manager commands."""
    _, mocks = externals
    (workdir / "rust-toolchain").write_text("1.75.0", encoding="utf-8")
    mocks["installer"].side_effect = subprocess.CalledProcessError(
        1, ["sh", "-s"]
    )

    assert install_devenv.main([]) == 1

    mocks["apt_exists"].assert_not_called()
    mocks["apt"].assert_not_called()


def test_exit_code_propagated_from_package_manager(workdir, externals):
    _, mocks = externals
    (workdir / "rust-toolchain").write_text("1.75.0", encoding="utf-8")
    mocks["apt"].side_effect = subprocess.CalledProcessError(
        100, ["apt", "update"]
    )

    assert install_devenv.main([]) == 100


def test_toolchain_file_option(workdir, externals):
    calls, _ = externals
    pin = workdir / "pins" / "toolchain"
    pin.parent.mkdir()
    pin.write_text("nightly-2024-01-01\n", encoding="utf-8")

    assert install_devenv.main(["--toolchain-file", str(pin)]) == 0

    assert calls[1][-1] == "nightly-2024-01-01"


def test_config_file_option(workdir, externals):
    calls, _ = externals
    (workdir / "pin.txt").write_text("1.76.0", encoding="utf-8")
    config = workdir / "custom.yaml"
    config.write_text(
        "toolchain_file: pin.txt\nsystem_packages: [pkg-config]\n",
        encoding="utf-8",
    )

    assert install_devenv.main(["--config", str(config), "-v"]) == 0

    assert calls[1][-1] == "1.76.0"
    assert calls[-1] == ["apt", "install", "-y", "pkg-config"]


def test_unexpected_error_returns_one(workdir, mocker):
    (workdir / "rust-toolchain").write_text("1.75.0", encoding="utf-8")
    mocker.patch(
        "install_devenv.run_bootstrap", side_effect=RuntimeError("boom")
    )

    assert install_devenv.main([]) == 1


def test_invalid_config_returns_one(workdir, externals):
    """A settings validation error is reported as exit 1, not raised."""
    calls, mocks = externals
    (workdir / "rust-toolchain").write_text("1.75.0", encoding="utf-8")
    config = workdir / "bad.yaml"
    config.write_text(
        "installer_url: http://sh.rustup.rs\n", encoding="utf-8"
    )

    assert install_devenv.main(["--config", str(config)]) == 1

    assert calls == []
    mocks["download"].assert_not_called()


def test_invalid_environment_setting_returns_one(workdir, externals, monkeypatch):
    calls, _ = externals
    monkeypatch.setenv("DEVENV_DOWNLOAD_TIMEOUT", "0")

    assert install_devenv.main([]) == 1

    assert calls == []
