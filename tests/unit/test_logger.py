import logging

from docextract.logging.logger import Log, _ContextFormatter


def _record(context: dict[str, object]) -> logging.LogRecord:
    record = logging.LogRecord("docextract", logging.INFO, __file__, 1, "Processing page", None, None)
    record.context = context
    return record


class TestContextFormatter:
    def test_appends_context_pairs(self) -> None:
        formatter = _ContextFormatter("%(message)s")
        assert formatter.format(_record({"page": 2, "total": 3})) == "Processing page | page=2 total=3"

    def test_plain_message_without_context(self) -> None:
        formatter = _ContextFormatter("%(message)s")
        assert formatter.format(_record({})) == "Processing page"


class TestLog:
    def test_configure_attaches_single_handler(self) -> None:
        try:
            Log.configure("debug")
            Log.configure("info")
            assert len(Log._logger.handlers) == 1
            assert Log._logger.level == logging.INFO
        finally:
            for handler in list(Log._logger.handlers):
                Log._logger.removeHandler(handler)
            Log._logger.setLevel(logging.NOTSET)

    def test_passes_context_as_extra(self, caplog) -> None:  # type: ignore[no-untyped-def]
        with caplog.at_level(logging.INFO, logger="docextract"):
            Log.info("Merged pages", pages=3)
        assert caplog.records[-1].context == {"pages": 3}
