"""Tests for the structured log formatters and context helpers."""

import json
import logging

from django.test import SimpleTestCase, tag

from facility_planner.logging import (
    DevFormatter,
    JsonFormatter,
    RequestContextFilter,
    bind_log_context,
    current_log_context,
    log_context,
    reset_log_context,
)


def _record(msg="hello", **extra):
    record = logging.LogRecord("facility_planner.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@tag("logging")
class JsonFormatterTests(SimpleTestCase):
    def test_includes_extra_fields(self):
        """Fields passed via extra= appear as top-level keys."""
        output = json.loads(JsonFormatter().format(_record(lead_id=7)))
        self.assertEqual(output["message"], "hello")
        self.assertEqual(output["level"], "INFO")
        self.assertEqual(output["lead_id"], 7)

    def test_unserializable_values_are_stringified(self):
        """Objects json cannot encode are written with str()."""
        output = json.loads(JsonFormatter().format(_record(thing=object())))
        self.assertTrue(output["thing"].startswith("<object object"))


@tag("logging")
class DevFormatterTests(SimpleTestCase):
    def test_appends_extras(self):
        """Extras follow a pipe as key=value pairs."""
        line = DevFormatter().format(_record(cadence="weekly"))
        self.assertIn("facility_planner.test hello | cadence='weekly'", line)


@tag("logging")
class LogContextTests(SimpleTestCase):
    def test_filter_copies_bound_context(self):
        """Bound fields are attached to records without overriding extras."""
        token = bind_log_context(request_id="r1", path="/api/leads/", remote_ip="")
        try:
            record = _record(path="/explicit")
            RequestContextFilter().filter(record)
        finally:
            reset_log_context(token)
        self.assertEqual(record.request_id, "r1")
        self.assertEqual(record.path, "/explicit")
        self.assertFalse(hasattr(record, "remote_ip"))

    def test_log_context_rebinds_captured_fields(self):
        """Background tasks can restore a captured request context."""
        with log_context({"request_id": "r2"}, task="sync"):
            self.assertEqual(current_log_context(), {"request_id": "r2", "task": "sync"})
        self.assertEqual(current_log_context(), {})
