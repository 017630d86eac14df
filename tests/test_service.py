from datetime import date
from types import SimpleNamespace

from tests.factories import BOB, make_issue, make_worklog
from worklog_app.core import service as service_mod
from worklog_app.core.jira_client import JiraAPI, JiraApiError
from worklog_app.core.models import DateRange
from worklog_app.core.service import WorklogService, build_worklog_data

JANUARY = DateRange(date(2025, 1, 1), date(2025, 1, 31))
FEBRUARY = DateRange(date(2025, 2, 1), date(2025, 2, 28))


def _payload():
    issues = [make_issue("PROJ-1"), make_issue("BETA-1", project_key="BETA", project_name="Project Beta")]
    worklogs = {
        "PROJ-1": [make_worklog("wl-1", 3600)],
        "BETA-1": [make_worklog("wl-2", 7200, author=BOB)],
        "GONE-1": [make_worklog("wl-3", 600)],
    }
    return issues, worklogs


class DummyAPI(JiraAPI):
    def __init__(self, on_fetch=None, error=None):
        self.server = "https://example.atlassian.net"
        self.calls = []
        self.on_fetch = on_fetch
        self.error = error

    def fetch_worklogs(self, start_date, end_date, *, progress=None):
        self.calls.append((start_date, end_date))
        if self.on_fetch:
            self.on_fetch()
        if self.error:
            raise self.error
        return _payload()


def test_build_worklog_data_drops_orphans():
    data = build_worklog_data(*_payload())
    assert [e.id for e in data.entries] == ["wl-1", "wl-2"]
    assert [p.project_key for p in data.projects] == ["BETA", "PROJ"]
    assert [m.display_name for m in data.team_members] == ["Bob", "Alice"]


def test_fetch_passes_api_dates_and_commits():
    api = DummyAPI()
    svc = WorklogService(api)
    data = svc.fetch_data(JANUARY)
    assert api.calls == [("2025-01-01", "2025-01-31")]
    assert svc.data is data
    assert svc.error is None
    assert svc.is_loading is False


def test_cache_hit_skips_fetch():
    api = DummyAPI()
    svc = WorklogService(api)
    first = svc.fetch_data(JANUARY)
    second = svc.fetch_data(JANUARY)
    assert second is first
    assert len(api.calls) == 1


def test_cache_expires_after_ttl(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(service_mod, "time", SimpleNamespace(time=lambda: now[0]))
    api = DummyAPI()
    svc = WorklogService(api, cache_ttl=300)
    svc.fetch_data(JANUARY)
    now[0] += 301
    assert svc.cached(JANUARY) is None
    svc.fetch_data(JANUARY)
    assert len(api.calls) == 2


def test_error_is_recorded_and_clearable():
    api = DummyAPI(error=JiraApiError("AUTH_FAILED", "Authentication failed.", 401))
    svc = WorklogService(api)
    assert svc.fetch_data(JANUARY) is None
    assert svc.error == "Authentication failed."
    assert svc.data is None
    assert svc.is_loading is False
    svc.clear_error()
    assert svc.error is None


def test_error_keeps_previous_data():
    api = DummyAPI()
    svc = WorklogService(api)
    january = svc.fetch_data(JANUARY)
    api.error = RuntimeError("network down")
    svc.fetch_data(FEBRUARY)
    assert svc.data is january
    assert svc.error == "network down"


def test_superseded_response_is_discarded():
    svc_holder = {}

    def start_newer_request():
        # A newer request begins while this one is still in flight
        svc_holder["svc"].begin_request()

    api = DummyAPI(on_fetch=start_newer_request)
    svc = WorklogService(api)
    svc_holder["svc"] = svc
    assert svc.fetch_data(JANUARY) is None
    assert svc.data is None
    # The newer request still owns the loading flag
    assert svc.is_loading is True
    # Result is cached even though it was not applied
    assert svc.cached(JANUARY) is not None


def test_superseded_error_is_discarded():
    svc_holder = {}
    api = DummyAPI(on_fetch=lambda: svc_holder["svc"].begin_request(), error=RuntimeError("late failure"))
    svc = WorklogService(api)
    svc_holder["svc"] = svc
    svc.fetch_data(JANUARY)
    assert svc.error is None


def test_cache_hit_supersedes_in_flight_fetch():
    svc_holder = {}
    api = DummyAPI()
    svc = WorklogService(api)
    svc_holder["svc"] = svc
    february = svc.fetch_data(FEBRUARY)
    # While January loads, the user switches back to the cached February range
    api.on_fetch = lambda: svc_holder["svc"].fetch_data(FEBRUARY)
    assert svc.fetch_data(JANUARY) is None
    assert svc.data is february
    assert svc.is_loading is False
    assert len(api.calls) == 2
