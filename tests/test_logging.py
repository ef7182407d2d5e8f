import logging

from curltui.util import logging as curltui_logging
from curltui.util.logging import KeyValueFormatter, get_logger


def _record(**extra):
    record = logging.LogRecord("curltui.core.builder", logging.INFO, __file__, 1,
                               "dispatching", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_formatter_appends_sorted_extras():
    fmt = KeyValueFormatter("%(message)s")

    line = fmt.format(_record(url="https://example.com", method="GET"))

    assert line == "dispatching | method=GET url=https://example.com"


def test_formatter_without_extras_is_plain():
    assert KeyValueFormatter("%(message)s").format(_record()) == "dispatching"


def test_adapter_merges_default_context(caplog):
    log = get_logger("curltui.test", url="https://example.com")

    with caplog.at_level(logging.DEBUG, logger="curltui.test"):
        log.info("sent", extra={"method": "POST"})

    record = caplog.records[-1]
    assert record.method == "POST"
    assert record.url == "https://example.com"


def test_adapter_fills_placeholders(caplog):
    log = get_logger("curltui.test")

    with caplog.at_level(logging.DEBUG, logger="curltui.test"):
        log.warning("no context")

    assert caplog.records[-1].method == "-"


def test_configure_logging_leaves_defaults_untouched(monkeypatch):
    seen = []
    monkeypatch.setattr(curltui_logging, "dictConfig", seen.append)

    curltui_logging.configure_logging("DEBUG")

    assert seen[0]["loggers"]["curltui"]["level"] == "DEBUG"
    assert curltui_logging._DEFAULT_LOGGING_CONF["loggers"]["curltui"]["level"] == "INFO"
