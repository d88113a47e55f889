import io
import logging
import sys

from contentful_cma.core.logging import LogfmtFormatter, setup_logging


def _record(msg, exc_info=None, **extra):
    record = logging.LogRecord(
        "contentful_cma.client", logging.INFO, __file__, 1, msg, None, exc_info
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_logfmt_includes_event_and_known_extras():
    line = LogfmtFormatter().format(
        _record(
            "cma_call",
            event="cma_call",
            method="GET",
            endpoint="/spaces/s1",
            status=200,
            tool=None,
        )
    )

    assert line.startswith("level=info logger=contentful_cma.client event=cma_call")
    assert "msg=" not in line
    assert "method=GET" in line
    assert "endpoint=/spaces/s1" in line
    assert "status=200" in line
    assert "tool=" not in line


def test_logfmt_plain_message_is_quoted():
    line = LogfmtFormatter().format(_record('Creating Entry "x"'))
    assert line.endswith('msg="Creating Entry \\"x\\""')
    assert "event=" not in line


def test_logfmt_keeps_multiline_errors_on_one_line():
    line = LogfmtFormatter().format(
        _record("Error creating Entry\n422 PUT /entries/e2: Validation error")
    )

    assert "\n" not in line
    assert 'msg="Error creating Entry\\n422 PUT /entries/e2: Validation error"' in line


def test_logfmt_includes_exception():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = _record("failed", exc_info=sys.exc_info())

    line = LogfmtFormatter().format(record)
    assert 'exc_type=ValueError exc="bad value"' in line


def test_setup_logging_replaces_handlers_and_quiets_httpx():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    stream = io.StringIO()
    try:
        setup_logging("debug")
        setup_logging("warning", stream=stream)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, LogfmtFormatter)
        assert root.level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

        logging.getLogger("contentful_cma.cli").warning("Clone failed")
        assert stream.getvalue() == (
            'level=warning logger=contentful_cma.cli msg="Clone failed"\n'
        )
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
