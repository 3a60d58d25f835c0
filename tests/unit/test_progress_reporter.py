import asyncio
import json

import httpx
import pytest

from zuhri.client.api import ApiClient
from zuhri.client.progress_reporter import ProgressReporter, is_lesson_completed


def test_is_lesson_completed():
    assert is_lesson_completed(90, 100) is True
    assert is_lesson_completed(89, 100) is False
    assert is_lesson_completed(10, 0) is False


def _recording_client(reports, status_code=200):
    def handler(request):
        body = json.loads(request.content)
        reports.append(body)
        if status_code != 200:
            return httpx.Response(status_code, json={"error": {"code": "X", "message": "failed"}})
        return httpx.Response(200, json={"message": "Progress saved", "data": body})
    return ApiClient("http://test", token="t", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_report_floors_position_and_derives_completion():
    reports = []
    client = _recording_client(reports)
    reporter = ProgressReporter(client, lesson_id=4, course_id=2)

    assert await reporter.report(45.9, 600) is True
    assert await reporter.report(540.2, 600) is True
    await client.aclose()

    assert reports[0] == {"watchedDuration": 45, "isCompleted": False, "courseId": 2}
    assert reports[1]["watchedDuration"] == 540
    assert reports[1]["isCompleted"] is True


@pytest.mark.asyncio
async def test_periodic_reports_only_while_playing():
    reports = []
    client = _recording_client(reports)
    position = {"time": 12.0, "playing": False}
    reporter = ProgressReporter(
        client, lesson_id=4,
        position_provider=lambda: (position["time"], 600.0, position["playing"]),
        interval=0.01,
    )

    reporter.start()
    await asyncio.sleep(0.04)
    assert reports == []

    position["playing"] = True
    await asyncio.sleep(0.04)
    await reporter.stop()
    await client.aclose()

    assert reports
    assert all(r["watchedDuration"] == 12 for r in reports)
    assert not reporter.running


@pytest.mark.asyncio
async def test_ended_reports_full_duration_and_stops():
    reports = []
    client = _recording_client(reports)
    received = []

    async def on_progress(data):
        received.append(data)

    reporter = ProgressReporter(
        client, lesson_id=4, position_provider=lambda: (1.0, 600.0, True), interval=10, on_progress=on_progress
    )
    reporter.start()
    assert await reporter.ended(600.4) is True
    await client.aclose()

    assert not reporter.running
    assert reports == [{"watchedDuration": 600, "isCompleted": True, "courseId": None}]
    assert received[0]["isCompleted"] is True


@pytest.mark.asyncio
async def test_failed_reports_are_dropped():
    reports = []
    client = _recording_client(reports, status_code=500)
    reporter = ProgressReporter(client, lesson_id=4)

    assert await reporter.report(30, 600) is False
    assert await reporter.report(40, 600) is False
    await client.aclose()
    assert len(reports) == 2


@pytest.mark.asyncio
async def test_unauthorized_stops_reporting():
    reports = []
    client = _recording_client(reports, status_code=401)
    reporter = ProgressReporter(client, lesson_id=4, position_provider=lambda: (5.0, 600.0, True), interval=0.01)

    reporter.start()
    await asyncio.sleep(0.05)
    await client.aclose()

    assert len(reports) == 1
    assert not reporter.running


def test_start_requires_position_provider():
    reporter = ProgressReporter(ApiClient("http://test"), lesson_id=1)
    with pytest.raises(ValueError):
        reporter.start()
