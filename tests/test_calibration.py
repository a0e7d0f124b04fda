import math
from fractions import Fraction

import pytest

from calibration import CalibrationConstants, command_pause_from_env, is_number
from errors import InvalidCalibration


def test_defaults_match_robot():
    c = CalibrationConstants()
    assert c.rotational_speed_right == 0.1
    assert c.rotational_speed_left == 0.1
    assert c.forward_speed == 0.00089
    assert c.motor_power == 255


@pytest.mark.parametrize("field", ["rotational_speed_right", "rotational_speed_left", "forward_speed"])
@pytest.mark.parametrize("value", [0, 0.0, -0.1, math.inf, math.nan, "fast", None])
def test_bad_speed_rejected(field, value):
    with pytest.raises(InvalidCalibration, match=field):
        CalibrationConstants(**{field: value})


@pytest.mark.parametrize("power", [0, 256, -1, 12.5, True])
def test_bad_power_rejected(power):
    with pytest.raises(InvalidCalibration, match="motor_power"):
        CalibrationConstants(motor_power=power)


def test_from_env(monkeypatch):
    monkeypatch.setenv("ROTATIONAL_SPEED_RIGHT", "0.2")
    monkeypatch.setenv("ROTATIONAL_SPEED_LEFT", "0.15")
    monkeypatch.setenv("FORWARD_SPEED", "0.001")
    monkeypatch.setenv("MOTOR_POWER", "180")
    c = CalibrationConstants.from_env()
    assert (c.rotational_speed_right, c.rotational_speed_left, c.forward_speed, c.motor_power) == \
        (0.2, 0.15, 0.001, 180)


def test_from_env_uses_defaults_when_unset(monkeypatch):
    for name in ("ROTATIONAL_SPEED_RIGHT", "ROTATIONAL_SPEED_LEFT", "FORWARD_SPEED", "MOTOR_POWER"):
        monkeypatch.delenv(name, raising=False)
    assert CalibrationConstants.from_env() == CalibrationConstants()


def test_from_env_fails_fast(monkeypatch):
    monkeypatch.setenv("FORWARD_SPEED", "0")
    with pytest.raises(InvalidCalibration):
        CalibrationConstants.from_env()

    monkeypatch.setenv("FORWARD_SPEED", "quick")
    with pytest.raises(InvalidCalibration, match="FORWARD_SPEED"):
        CalibrationConstants.from_env()


def test_command_pause_from_env(monkeypatch):
    monkeypatch.delenv("COMMAND_PAUSE_MS", raising=False)
    assert command_pause_from_env() == 1000
    monkeypatch.setenv("COMMAND_PAUSE_MS", "250")
    assert command_pause_from_env() == 250.0
    monkeypatch.setenv("COMMAND_PAUSE_MS", "0")
    assert command_pause_from_env() == 0.0


@pytest.mark.parametrize("raw", ["-5", "soon", "nan", "inf"])
def test_command_pause_from_env_rejects(monkeypatch, raw):
    monkeypatch.setenv("COMMAND_PAUSE_MS", raw)
    with pytest.raises(InvalidCalibration, match="COMMAND_PAUSE_MS|command pause"):
        command_pause_from_env()


@pytest.mark.parametrize("value", [1, 0.25, Fraction(1, 3)])
def test_is_number_accepts_reals(value):
    assert is_number(value)


@pytest.mark.parametrize("value", [True, "1", None, 1j])
def test_is_number_rejects(value):
    assert not is_number(value)
