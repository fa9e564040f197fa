import json

import pytest

from gpiofeed.cli import load_config, main
from gpiofeed.frames import BUFFER_FRAMES, GpioFrame


def _prepare_sysfs(root):
    pin_dir = root / "sys" / "class" / "gpio" / "gpio66"
    pin_dir.mkdir(parents=True)
    (pin_dir / "direction").write_text("in\n")
    (root / "sys" / "devices" / "platform" / "ocp" / "ocp:P8_07_pinmux").mkdir(parents=True)


def _write_config(path, commands):
    config = {
        "GPIOCmdsFile": str(commands),
        "GPIOPins": {"Pin01": {"Num": 1, "AbsNum": "66", "HdrNum": "P8_07", "Mode": "out"}},
    }
    path.write_text(json.dumps(config))
    return config


def test_load_config_round_trip(tmp_path):
    path = tmp_path / "config.json"
    config = _write_config(path, tmp_path / "cmds.bin")
    assert load_config(path) == config


def test_load_config_requires_command_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"GPIOPins": {}}))
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_config(path)


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_main_with_missing_config_fails(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 1


def test_main_with_missing_command_file_fails(tmp_path):
    path = tmp_path / "config.json"
    _write_config(path, tmp_path / "missing.bin")
    assert main([str(path)]) == 1


def test_main_plays_commands_onto_pins(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("time.sleep", lambda seconds: None)
    _prepare_sysfs(tmp_path)
    commands = tmp_path / "cmds.bin"
    frames = [GpioFrame(0, 0)] * (BUFFER_FRAMES - 1) + [GpioFrame(1, 0)]
    commands.write_bytes(b"".join(frame.to_bytes() for frame in frames))
    config_path = tmp_path / "config.json"
    _write_config(config_path, commands)

    assert main([str(config_path), "--sysfs-root", str(tmp_path)]) == 0
    assert (tmp_path / "sys/class/gpio/gpio66/value").read_text() == "1\n"
    assert (tmp_path / "sys/devices/platform/ocp/ocp:P8_07_pinmux/state").read_text() == "gpio\n"
    assert "Exiting" in capsys.readouterr().out