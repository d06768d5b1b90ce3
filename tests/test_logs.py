import logging

from cypherkit.logs import log_query


def test_log_query_message_and_fields(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="cypherkit.queries"):
        log_query("execute", "completed", return_type="PARSER", query_count=2, duration=0.0125)

    record = caplog.records[-1]
    assert record.getMessage() == "execute completed return_type=PARSER query_count=2 duration_ms=12.5"
    assert record.operation == "execute"
    assert record.query_count == 2
    assert record.duration_ms == 12.5


def test_log_query_omits_missing_fields(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="cypherkit.queries"):
        log_query("read_transaction", "called", return_type="RAW")

    record = caplog.records[-1]
    assert record.getMessage() == "read_transaction called return_type=RAW"
    assert not hasattr(record, "duration_ms")
