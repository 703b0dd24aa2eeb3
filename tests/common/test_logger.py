import json
import logging

from extensions.logger import JsonFormatter


def test_json_formatter_includes_context_fields():
    record = logging.LogRecord("services.issue_service", logging.INFO, __file__, 1,
                               "issue created: id=%s", (7,), None)
    record.request_id = "abc"
    record.project_id = 3
    data = json.loads(JsonFormatter("tracker").format(record))
    assert data["app"] == "tracker"
    assert data["msg"] == "issue created: id=7"
    assert data["request_id"] == "abc"
    assert data["project_id"] == 3
    assert "issue_id" not in data


def test_generated_request_id_differs_per_request(client):
    first = client.get("/api/healthcheck").headers["X-Request-Id"]
    second = client.get("/api/healthcheck").headers["X-Request-Id"]
    assert first and second and first != second
