import io

import pytest

from jollycore.log import Logger, Severity, Sink, StdoutSink


class _Collect(Sink):
    def __init__(self):
        self.parts = []
        self.flushes = 0

    def write(self, data):
        self.parts.append(data if isinstance(data, str) else data.decode())

    def flush(self):
        self.flushes += 1


@pytest.mark.parametrize(
    "method, prefix",
    [("info", "info: "), ("warn", "warn: "), ("crit", "crit: ")],
)
def test_each_severity_prefix(method, prefix):
    sink = _Collect()
    getattr(Logger(sink), method)("message")
    assert "".join(sink.parts) == prefix + "message\n"
    assert sink.flushes == 1


def test_log_with_level():
    sink = _Collect()
    Logger(sink).log(Severity.WARN, "this is a warning")
    assert "".join(sink.parts) == "warn: this is a warning\n"


def test_stdout_sink(capsys):
    Logger(StdoutSink()).info("this is info")
    assert capsys.readouterr().out == "info: this is info\n"


def test_stdout_sink_bytes_to_stream():
    stream = io.StringIO()
    sink = StdoutSink(stream)
    sink.write(b"abc")
    sink.write("def")
    sink.flush()
    assert stream.getvalue() == "abcdef"


def test_instance_is_shared():
    first = Logger.instance()
    second = Logger.instance()
    assert isinstance(first, Logger)
    assert second is first


def test_sink_is_abstract():
    with pytest.raises(TypeError):
        Sink()