"""The application configuration layout and its process-wide manager."""

import json
import threading
from pathlib import Path

from sensefuse.config_types import (
    BOOL,
    FLOAT,
    INT,
    SIZE,
    STRING,
    UINT,
    UINT16,
    ConfigEntry,
    ConfigError,
    ConfigGroup,
)


class ImuConfig(ConfigGroup):
    """IMU input settings."""

    def __init__(self, name="imu", parent=None):
        super().__init__(name, parent)
        self.buffer_size = ConfigEntry("bufferSize", self, SIZE)
        self.filter_size = ConfigEntry("filterSize", self, SIZE)


class LidarConfig(ConfigGroup):
    """Lidar input settings."""

    def __init__(self, name="lidar", parent=None):
        super().__init__(name, parent)
        self.buffer_size = ConfigEntry("bufferSize", self, SIZE)
        self.port = ConfigEntry("port", self, UINT16)
        self.point_scale = ConfigEntry("pointScale", self, FLOAT)
        self.rings = ConfigEntry("rings", self, INT)
        self.vertical_fov_angle = ConfigEntry("vertical_fov_angle", self, FLOAT)


class BridgeConfig(ConfigGroup):
    """Settings for bridging data to and from a remote PC."""

    def __init__(self, name="bridge", parent=None):
        super().__init__(name, parent)
        self.use_from = ConfigEntry("use_from", self, BOOL)
        self.use_to = ConfigEntry("use_to", self, BOOL)
        self.send_original = ConfigEntry("send_original", self, BOOL)
        self.send_preprocessed = ConfigEntry("send_preprocessed", self, BOOL)
        self.send_after_registration = ConfigEntry("send_after_registration", self, BOOL)
        self.host_from = ConfigEntry("host_from", self, STRING)
        self.recv_timeout = ConfigEntry("recv_timeout", self, UINT16)
        self.imu_port_from = ConfigEntry("imu_port_from", self, UINT16)
        self.imu_port_to = ConfigEntry("imu_port_to", self, UINT16)
        self.pcl_port_from = ConfigEntry("pcl_port_from", self, UINT16)
        self.pcl_port_to = ConfigEntry("pcl_port_to", self, UINT16)
        self.transform_port_to = ConfigEntry("transform_port_to", self, UINT16)
        self.tsdf_port_to = ConfigEntry("tsdf_port_to", self, UINT16)


class GPIOConfig(ConfigGroup):
    """Button and LED wiring."""

    def __init__(self, name="gpio", parent=None):
        super().__init__(name, parent)
        self.button_chip = ConfigEntry("button_chip", self, STRING)
        self.led_chip = ConfigEntry("led_chip", self, STRING)
        self.button_line = ConfigEntry("button_line", self, UINT)
        self.led_line = ConfigEntry("led_line", self, UINT)


class RegistrationConfig(ConfigGroup):
    """Scan registration settings."""

    def __init__(self, name="registration", parent=None):
        super().__init__(name, parent)
        self.max_iterations = ConfigEntry("max_iterations", self, UINT)
        self.it_weight_gradient = ConfigEntry("it_weight_gradient", self, FLOAT)
        self.epsilon = ConfigEntry("epsilon", self, FLOAT)


class SlamConfig(ConfigGroup):
    """TSDF mapping settings."""

    def __init__(self, name="slam", parent=None):
        super().__init__(name, parent)
        self.max_distance = ConfigEntry("max_distance", self, INT)
        self.map_resolution = ConfigEntry("map_resolution", self, UINT)
        self.map_size_x = ConfigEntry("map_size_x", self, UINT)
        self.map_size_y = ConfigEntry("map_size_y", self, UINT)
        self.map_size_z = ConfigEntry("map_size_z", self, UINT)
        self.max_weight = ConfigEntry("max_weight", self, FLOAT)
        self.initial_map_weight = ConfigEntry("initial_map_weight", self, FLOAT)
        self.map_update_period = ConfigEntry("map_update_period", self, UINT)
        self.map_update_position_threshold = ConfigEntry(
            "map_update_position_threshold", self, FLOAT
        )
        self.map_path = ConfigEntry("map_path", self, STRING)


class Config(ConfigGroup):
    """The complete application configuration."""

    def __init__(self, name="", parent=None):
        super().__init__(name, parent)
        self.imu = ImuConfig("imu", self)
        self.lidar = LidarConfig("lidar", self)
        self.registration = RegistrationConfig("registration", self)
        self.gpio = GPIOConfig("gpio", self)
        self.bridge = BridgeConfig("bridge", self)
        self.slam = SlamConfig("slam", self)


class ConfigManager:
    """Holds the single process-wide :class:`Config` and moves it to and from JSON.

    Loaded data may be partial; entries it does not mention keep their values.
    """

    _lock = threading.Lock()
    _config = None

    @classmethod
    def config(cls):
        """Return the shared configuration, creating it on first use."""
        with cls._lock:
            if cls._config is None:
                cls._config = Config()
            return cls._config

    @classmethod
    def _update(cls, tree):
        config = cls.config()
        if not config.can_set(tree):
            raise ConfigError("configuration data does not match the configuration layout")
        config.set(tree)

    @classmethod
    def load_string(cls, data):
        """Update the configuration from a JSON string."""
        try:
            tree = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON: {exc}") from exc
        cls._update(tree)

    @classmethod
    def load_file(cls, filename):
        """Update the configuration from a JSON file."""
        cls.load_string(Path(filename).read_text(encoding="utf-8"))

    @classmethod
    def create_string(cls):
        """Return the current configuration as a JSON string."""
        return json.dumps(cls.config().get_node(), indent=4)

    @classmethod
    def write_file(cls, filename):
        """Write the current configuration to a JSON file."""
        Path(filename).write_text(cls.create_string() + "\n", encoding="utf-8")