"""Tests for register scaling tables."""

from functools import partial

import pytest

from langji_ac_mcp.models.registers import (
    BAUD_RATES,
    CONFIG_TRANSFORMS,
    SENSOR_TRANSFORMS,
    Transform,
    apply_transform,
    decode_register,
    decode_registers,
    to_signed,
)

decode_sensor = partial(decode_register, SENSOR_TRANSFORMS)
decode_configuration = partial(decode_register, CONFIG_TRANSFORMS)


def test_to_signed():
    assert to_signed(0) == 0
    assert to_signed(32767) == 32767
    assert to_signed(32768) == -32768
    assert to_signed(65526) == -10
    assert to_signed(65535) == -1


def test_sensor_negative_temperature():
    """0xFFF6 at the internal temperature sensor is -1.0 °C."""
    assert decode_sensor(0x0000, 0xFFF6) == -1.0


def test_sensor_signed_addresses():
    """Addresses 0x00, 0x01 and 0x06 are signed tenths."""
    for address in (0x0000, 0x0001, 0x0006):
        assert decode_sensor(address, 253) == pytest.approx(25.3)
        assert decode_sensor(address, 0xFF9C) == pytest.approx(-10.0)


def test_sensor_hundredths():
    """Address 0x02 raw 2500 is 25.0."""
    assert decode_sensor(0x0002, 2500) == 25.0
    assert decode_sensor(0x0004, 0xFFF6) == pytest.approx(655.26)


def test_sensor_tenths_unsigned():
    assert decode_sensor(0x0005, 0xFFF6) == pytest.approx(6552.6)


def test_sensor_power_switch():
    """The on/off register scales 0xFF00 to 1.0."""
    assert decode_sensor(0x0023, 0xFF00) == 1.0
    assert decode_sensor(0x0023, 0x0000) == 0.0


def test_sensor_unlisted_address_is_raw():
    """Addresses outside the table keep the raw integer."""
    value = decode_sensor(0x0010, 1234)
    assert value == 1234
    assert isinstance(value, int)


def test_config_signed_temperatures():
    for address in range(0x0000, 0x0006):
        assert decode_configuration(address, 0xFFCE) == pytest.approx(-5.0)


def test_config_humidity_tenths():
    for address in (0x0006, 0x0007, 0x0008):
        assert decode_configuration(address, 855) == pytest.approx(85.5)


def test_config_baud_rate():
    """Raw 2 is 19200 baud; raw 5 is outside the table and kept."""
    assert decode_configuration(0x000E, 2) == 19200
    assert decode_configuration(0x000E, 5) == 5
    assert [decode_configuration(0x000E, i) for i in range(4)] == list(BAUD_RATES)


def test_config_voltage_alarms():
    assert decode_configuration(0x0012, 2640) == pytest.approx(264.0)
    assert decode_configuration(0x0013, 1760) == pytest.approx(176.0)


def test_config_unlisted_address_is_raw():
    assert decode_configuration(0x0009, 0xFFFF) == 0xFFFF


def test_tables_use_only_known_transforms():
    """Every table entry is a Transform member."""
    for table in (SENSOR_TRANSFORMS, CONFIG_TRANSFORMS):
        assert all(isinstance(t, Transform) for t in table.values())


def test_identity_transform():
    assert apply_transform(Transform.IDENTITY, 0xABCD) == 0xABCD


def test_decode_registers_order_and_addresses():
    """Results are keyed by absolute address in ascending order."""
    result = decode_registers(SENSOR_TRANSFORMS, 0x0005, [250, 655, 7])
    assert list(result) == [0x0005, 0x0006, 0x0007]
    assert result[0x0005] == 25.0
    assert result[0x0006] == 65.5
    assert result[0x0007] == 7


def test_decode_registers_uses_absolute_address():
    """A read starting at 0x0023 still scales the power switch."""
    assert decode_registers(SENSOR_TRANSFORMS, 0x0023, [0xFF00]) == {0x0023: 1.0}
