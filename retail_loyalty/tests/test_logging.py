from loguru import logger

from retail_loyalty.config import set_config_for_test
from retail_loyalty.logging import AppLogger, get_logger


def _capture(level="DEBUG"):
    messages = []
    sink_id = logger.add(lambda msg: messages.append(msg.record), level=level, format="{message}")
    return messages, sink_id


def test_repeated_get_logger_keeps_other_sinks():
    get_logger()
    messages, sink_id = _capture()
    try:
        get_logger("retail_loyalty.services.checkout")
        get_logger("retail_loyalty.services.work_orders").info("bill saved")
    finally:
        logger.remove(sink_id)

    assert [r["message"] for r in messages] == ["bill saved"]


def test_name_is_bound_as_component():
    get_logger()
    messages, sink_id = _capture()
    try:
        get_logger("retail_loyalty.integrations.tally").warning("push failed")
        get_logger().info("unnamed")
    finally:
        logger.remove(sink_id)

    assert messages[0]["extra"]["component"] == "retail_loyalty.integrations.tally"
    assert messages[1]["extra"]["component"] == "retail_loyalty"


def test_level_change_replaces_app_sink(tmp_path):
    get_logger()
    first_sink = AppLogger._sink_id

    get_logger("same.level")
    assert AppLogger._sink_id == first_sink

    set_config_for_test(data_dir=str(tmp_path), log_level="warning")
    get_logger()
    assert AppLogger._level == "WARNING"
    assert AppLogger._sink_id != first_sink
