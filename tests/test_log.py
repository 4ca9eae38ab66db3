import pytest

from sensefuse.log import FileSink, Logger, LogLevel, Sink


class ListSink(Sink):
    def __init__(self):
        self.messages = []

    def write(self, msg):
        self.messages.append(msg)


@pytest.fixture
def sink():
    collector = ListSink()
    Logger.add_sink(collector)
    Logger.set_loglevel(LogLevel.DEBUG)
    yield collector
    Logger.remove_sink(collector)
    Logger.set_loglevel(LogLevel.INFO)


def test_message_format(sink):
    Logger.info("hello ", 42)
    assert len(sink.messages) == 1
    msg = sink.messages[0]
    assert msg.startswith("[")
    assert msg.endswith("[INFO]    hello 42\n")


@pytest.mark.parametrize(
    "method, prefix",
    [
        (Logger.debug, "[DEBUG]   "),
        (Logger.info, "[INFO]    "),
        (Logger.warning, "[WARNING] "),
        (Logger.error, "[ERROR]   "),
        (Logger.fatal, "[FATAL]   "),
    ],
)
def test_level_prefixes(sink, method, prefix):
    method("text")
    assert sink.messages[0].endswith(prefix + "text\n")


def test_messages_below_level_are_dropped(sink):
    Logger.set_loglevel(LogLevel.WARNING)
    Logger.debug("a")
    Logger.info("b")
    Logger.warning("c")
    Logger.error("d")
    assert [m[-2] for m in sink.messages] == ["c", "d"]


def test_log_accepts_integer_level(sink):
    Logger.log(3, "x")
    assert "[ERROR]   x" in sink.messages[0]
    with pytest.raises(ValueError):
        Logger.log(99, "x")


def test_removed_sink_receives_nothing(sink):
    other = ListSink()
    Logger.add_sink(other)
    Logger.remove_sink(other)
    Logger.info("after")
    assert other.messages == []
    assert len(sink.messages) == 1


def test_file_sink_appends(tmp_path):
    path = tmp_path / "log.txt"
    with FileSink(path) as first:
        first.write("one\n")
    with FileSink(path) as second:
        second.write("two\n")
    assert path.read_text(encoding="utf-8") == "one\ntwo\n"


def test_file_sink_write_mode_truncates(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text("old\n", encoding="utf-8")
    file_sink = FileSink(path, "w")
    file_sink.write("new\n")
    assert path.read_text(encoding="utf-8") == "new\n"
    file_sink.close()


def test_logger_writes_to_file_sink(tmp_path):
    path = tmp_path / "log.txt"
    file_sink = FileSink(path)
    Logger.add_sink(file_sink)
    try:
        Logger.warning("disk ", "check")
    finally:
        Logger.remove_sink(file_sink)
        file_sink.close()
    assert path.read_text(encoding="utf-8").endswith("[WARNING] disk check\n")