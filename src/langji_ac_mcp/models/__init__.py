"""Register maps, scaling tables, and display labels."""

from .registers import (
    Transform,
    SENSOR_TRANSFORMS,
    CONFIG_TRANSFORMS,
    decode_registers,
)
from .descriptions import describe_address, format_register_values
