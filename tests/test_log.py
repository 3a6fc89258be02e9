import io
import logging

from copyhead.core.log import PACKAGE_LOGGER_NAME, configure_logging, get_logger


def test_get_logger_defaults_to_package_logger():
    assert get_logger().name == PACKAGE_LOGGER_NAME
    assert get_logger("copyhead.core.header").name == "copyhead.core.header"


def test_package_logger_has_null_handler():
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_configure_logging_sets_logger_level():
    logger = logging.getLogger("copyhead.test.configure")
    logger.setLevel(logging.WARNING)

    configure_logging(level="DEBUG", logger_name=logger.name, stream=io.StringIO())

    assert logger.level == logging.DEBUG
    assert logger.propagate is True


def test_configure_logging_writes_to_stream_once():
    stream = io.StringIO()
    name = "copyhead.test.stream"
    configure_logging(level="INFO", stream=stream, fmt="%(levelname)s %(message)s", logger_name=name)
    configure_logging(level="INFO", stream=stream, logger_name=name, propagate=False)

    logger = logging.getLogger(name)
    logger.info("hello")

    assert stream.getvalue() == "INFO hello\n"
    assert logger.propagate is False


def test_configure_logging_level_names_are_case_insensitive():
    logger = configure_logging(level=" warning ", logger_name="copyhead.test.names", stream=io.StringIO())
    assert logger.level == logging.WARNING
    configure_logging(level="chatty", logger_name=logger.name, stream=io.StringIO())
    assert logger.level == logging.INFO


def test_configure_logging_replaces_format_and_closed_stream():
    name = "copyhead.test.reconfigure"
    first = io.StringIO()
    configure_logging(stream=first, fmt="%(message)s", logger_name=name)
    first.close()

    second = io.StringIO()
    logger = configure_logging(stream=second, fmt="[%(levelname)s] %(message)s", logger_name=name, propagate=False)
    logger.warning("moved")

    assert len([h for h in logger.handlers if isinstance(h, logging.StreamHandler)]) == 1
    assert second.getvalue() == "[WARNING] moved\n"
