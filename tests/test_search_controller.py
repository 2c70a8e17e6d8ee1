from __future__ import annotations

import pytest

from conftest import FailingClient, GatedClient, RecordingClient, pump, wait_until
from core.search_controller import SearchController


@pytest.fixture
def make_controller(qapp):
    created: list[SearchController] = []

    def _make(client, debounce_ms: int = 40):
        controller = SearchController(client, debounce_ms=debounce_ms)
        created.append(controller)
        return controller

    yield _make

    for controller in created:
        controller.shutdown()


def test_rapid_edits_issue_one_call_for_last_query(make_controller) -> None:
    client = RecordingClient()
    controller = make_controller(client)

    controller.set_query("a")
    controller.set_query("ab")
    controller.set_query("abc")

    assert wait_until(lambda: client.calls and not controller.loading)
    pump(0.15)

    assert client.calls == ["abc"]
    assert [t.track_name for t in controller.tracks] == ["abc"]
    assert controller.error is None


def test_each_quiet_period_issues_its_own_call(make_controller) -> None:
    client = RecordingClient()
    controller = make_controller(client)

    controller.set_query("first")
    assert wait_until(lambda: len(client.calls) == 1 and not controller.loading)

    controller.set_query("second")
    assert wait_until(lambda: len(client.calls) == 2 and not controller.loading)

    assert client.calls == ["first", "second"]


def test_nothing_fires_before_debounce_elapses(make_controller) -> None:
    client = RecordingClient()
    controller = make_controller(client, debounce_ms=500)

    controller.set_query("slow typist")
    pump(0.1)

    assert controller.is_pending()
    assert client.calls == []
    assert controller.loading is False


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_never_hits_network(make_controller, query) -> None:
    client = RecordingClient()
    controller = make_controller(client)

    controller.set_query("x")
    controller.set_query(query)
    pump(0.15)

    assert client.calls == []
    assert controller.tracks == []
    assert controller.loading is False


def test_clearing_query_empties_previous_results(make_controller) -> None:
    client = RecordingClient()
    controller = make_controller(client)

    controller.set_query("hello")
    assert wait_until(lambda: controller.tracks)

    controller.set_query("  ")
    assert wait_until(lambda: not controller.tracks)
    assert client.calls == ["hello"]
    assert controller.loading is False


def test_server_error_surfaces_message(make_controller) -> None:
    client = FailingClient("HTTP error! status: 500")
    controller = make_controller(client)

    controller.set_query("boom")

    assert wait_until(lambda: controller.error is not None)
    assert controller.loading is False
    assert controller.tracks == []
    assert "500" in controller.error


def test_error_is_cleared_by_next_search(make_controller) -> None:
    failing = FailingClient()
    controller = make_controller(failing)

    controller.set_query("boom")
    assert wait_until(lambda: controller.error is not None)

    controller.client = RecordingClient()
    controller.set_query("fine")
    assert wait_until(lambda: controller.tracks)
    assert controller.error is None


def test_loading_flag_is_set_while_request_is_in_flight(make_controller) -> None:
    client = GatedClient(gated={"wait"})
    controller = make_controller(client)
    states: list[bool] = []
    controller.loadingChanged.connect(states.append)

    controller.set_query("wait")
    assert wait_until(lambda: controller.loading)

    client.release.set()
    assert wait_until(lambda: not controller.loading)
    assert states == [True, False]


def test_stale_reply_does_not_overwrite_newer_results(make_controller) -> None:
    client = GatedClient(gated={"slow"})
    controller = make_controller(client)

    controller.set_query("slow")
    controller.search_now()
    assert wait_until(lambda: client.calls == ["slow"])

    controller.set_query("fast")
    controller.search_now()
    assert wait_until(lambda: controller.tracks and not controller.loading)

    client.release.set()
    pump(0.2)

    assert [t.track_name for t in controller.tracks] == ["fast"]
    assert controller.loading is False


def test_search_now_skips_the_debounce(make_controller) -> None:
    client = RecordingClient()
    controller = make_controller(client, debounce_ms=10_000)

    controller.set_query("now")
    controller.search_now()

    assert wait_until(lambda: client.calls == ["now"])
    assert not controller.is_pending()


def test_same_query_does_not_reschedule(make_controller) -> None:
    client = RecordingClient()
    controller = make_controller(client)

    controller.set_query("repeat")
    assert wait_until(lambda: client.calls and not controller.loading)

    controller.set_query("repeat")
    pump(0.15)

    assert client.calls == ["repeat"]


def test_error_survives_blank_query(make_controller) -> None:
    client = FailingClient("HTTP error! status: 500")
    controller = make_controller(client)

    controller.set_query("boom")
    assert wait_until(lambda: controller.error is not None)

    controller.set_query(" ")
    pump(0.15)

    assert client.calls == ["boom"]
    assert controller.tracks == []
    assert controller.loading is False
    assert controller.error == "HTTP error! status: 500"
