import json
import logging

from chathotel.logging_config import JSONFormatter, LoggerAdapter, get_logger, preview, setup_logging


def _record(message: str, context=None) -> logging.LogRecord:
    record = logging.LogRecord("chathotel.test", logging.INFO, __file__, 1, message, None, None)
    if context is not None:
        record.context = context
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record("hello")))

        assert data["level"] == "INFO"
        assert data["logger"] == "chathotel.test"
        assert data["message"] == "hello"
        assert "context" not in data

    def test_includes_context(self):
        data = json.loads(JSONFormatter().format(_record("hello", {"phone": "919876543210"})))
        assert data["context"] == {"phone": "919876543210"}

    def test_previews_message_text_fields(self):
        context = {"phone": "919876543210", "text": "a" * 150, "reply": "short", "count": 3}

        data = json.loads(JSONFormatter().format(_record("hello", context)))

        assert data["context"]["text"] == "a" * 100 + "..."
        assert data["context"]["reply"] == "short"
        assert data["context"]["phone"] == "919876543210"
        assert data["context"]["count"] == 3

    def test_service_name(self):
        data = json.loads(JSONFormatter(service="Test Lodge Bot").format(_record("hello")))
        assert data["service"] == "Test Lodge Bot"

    def test_keeps_unicode(self):
        output = JSONFormatter().format(_record("🏨 नमस्ते"))
        assert "🏨 नमस्ते" in output


class TestSetupLogging:
    def test_replaces_own_handler_and_keeps_others(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        other = logging.NullHandler()
        root.addHandler(other)
        try:
            setup_logging("DEBUG")
            setup_logging("WARNING")

            json_handlers = [h for h in root.handlers if isinstance(h.formatter, JSONFormatter)]
            assert len(json_handlers) == 1
            assert other in root.handlers
            assert root.level == logging.WARNING
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestLoggerHelpers:
    def test_get_logger_prefix(self):
        assert get_logger("webhook").name == "chathotel.webhook"

    def test_preview_truncates(self):
        assert preview("a" * 150) == "a" * 100 + "..."
        assert preview("short") == "short"
        assert preview(None) == ""

    def test_adapter_merges_context(self):
        adapter = LoggerAdapter(get_logger("test"), {"phone": "919876543210"})

        msg, kwargs = adapter.process("hello", {"context": {"message_id": "wamid.1"}})

        assert msg == "hello"
        assert kwargs["extra"]["context"] == {"phone": "919876543210", "message_id": "wamid.1"}
