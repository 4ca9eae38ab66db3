import pytest

from sensefuse.config_types import (
    BOOL,
    FLOAT,
    INT,
    STRING,
    UINT16,
    ConfigEntry,
    ConfigError,
    ConfigGroup,
)


def make_tree():
    root = ConfigGroup("", None)
    net = ConfigGroup("net", root)
    port = ConfigEntry("port", net, UINT16)
    host = ConfigEntry("host", net, STRING)
    scale = ConfigEntry("scale", root, FLOAT)
    return root, net, port, host, scale


def test_defaults():
    assert ConfigEntry("a", None, INT)() == 0
    assert ConfigEntry("b", None, STRING)() == ""
    assert ConfigEntry("c", None, BOOL)() is False


def test_python_types_map_to_entry_types():
    entry = ConfigEntry("a", None, float)
    entry.set(3)
    assert entry() == 3.0
    assert isinstance(entry(), float)
    with pytest.raises(TypeError):
        ConfigEntry("b", None, list)


def test_set_and_get():
    entry = ConfigEntry("port", None, UINT16)
    entry.set(5555)
    assert entry() == 5555
    assert entry.get_node() == 5555


def test_string_data_converts():
    flag = ConfigEntry("flag", None, BOOL)
    flag.set("true")
    assert flag() is True
    num = ConfigEntry("num", None, INT)
    num.set("42")
    assert num() == 42


def test_out_of_range_rejected_and_value_kept():
    entry = ConfigEntry("port", None, UINT16)
    entry.set(80)
    assert not entry.can_set(70000)
    assert not entry.can_set(-1)
    with pytest.raises(ConfigError):
        entry.set(70000)
    assert entry() == 80


def test_wrong_kind_rejected():
    entry = ConfigEntry("n", None, INT)
    assert not entry.can_set(1.5)
    assert not entry.can_set(True)
    assert not entry.can_set({"a": 1})
    assert entry.can_set(2.0)


def test_entry_handler_receives_new_value():
    entry = ConfigEntry("scale", None, FLOAT)
    seen = []
    handle = entry.add_handler(seen.append)
    entry.set(2.5)
    entry.remove_handler(handle)
    entry.set(4.0)
    assert seen == [2.5]


def test_is_group():
    root, net, port, _, _ = make_tree()
    assert root.is_group() and net.is_group()
    assert not port.is_group()


def test_group_set_nested_and_get_node_round_trip():
    root, _, port, host, scale = make_tree()
    data = {"net": {"port": 1234, "host": "localhost"}, "scale": 0.5}
    root.set(data)
    assert port() == 1234
    assert host() == "localhost"
    assert scale() == 0.5
    assert root.get_node() == data


def test_partial_update_keeps_other_values():
    root, _, port, host, _ = make_tree()
    root.set({"net": {"port": 10, "host": "a"}})
    root.set({"net": {"port": 20}})
    assert port() == 20
    assert host() == "a"


def test_group_rejects_unknown_key_without_partial_update():
    root, _, port, _, _ = make_tree()
    root.set({"net": {"port": 10}})
    bad = {"net": {"port": 11, "unknown": 1}}
    assert not root.can_set(bad)
    with pytest.raises(ConfigError):
        root.set(bad)
    assert port() == 10


def test_group_rejects_invalid_member_without_partial_update():
    root, _, port, _, scale = make_tree()
    root.set({"scale": 1.0, "net": {"port": 5}})
    with pytest.raises(ConfigError):
        root.set({"scale": 2.0, "net": {"port": "not a number"}})
    assert scale() == 1.0
    assert port() == 5


def test_group_requires_mapping():
    root, _, _, _, _ = make_tree()
    assert not root.can_set([1, 2])
    with pytest.raises(ConfigError):
        root.set("text")


def test_group_handlers_fire_for_nested_updates():
    root, net, _, _, _ = make_tree()
    calls = []
    root_handle = root.add_handler(lambda: calls.append("root"))
    net.add_handler(lambda: calls.append("net"))
    root.set({"net": {"port": 1}})
    assert calls == ["net", "root"]
    root.remove_handler(root_handle)
    root.set({"net": {"port": 2}})
    assert calls == ["net", "root", "net"]


def test_duplicate_registration_raises():
    root = ConfigGroup("", None)
    ConfigEntry("x", root, INT)
    with pytest.raises(ConfigError):
        ConfigEntry("x", root, FLOAT)