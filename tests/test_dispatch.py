"""Tests for the command dispatcher against an in-memory runtime."""

import logging

import pytest
from unittest import mock
from rich.console import Console

import docker
import docker.errors

from dockctl.dispatch import (
    Dispatcher,
    InspectContainer,
    KillContainer,
    ListImages,
    ListRunningContainers,
)
from dockctl.errors import ContainerNotFoundError, InvalidRequestError, MalformedRecordError, RuntimeRequestError
from dockctl.config import Settings
from dockctl.render import TableRenderer
from dockctl.runtime import RuntimeClient
from tests.fakes import FakeRuntime


def _dispatcher(runtime):
    console = Console(record=True, width=120)
    return Dispatcher(runtime, TableRenderer(console)), console


CONTAINERS = [
    {"Id": "aaaaaaaaaaaaaaaa", "Names": ["/web-1"], "Image": "nginx:alpine", "State": "running"},
    {"Id": "bbbbbbbbbbbbbbbb", "Names": ["/old-job"], "Image": "busybox", "State": "exited"},
    {"Id": "cccccccccccccccc", "Names": None, "Image": None, "State": "running"},
]


class TestListImages:
    def test_renders_rows(self):
        runtime = FakeRuntime(images=[{"Id": "sha256:abcdef123456ffff", "Size": 2048000, "RepoTags": ["app:latest"]}])
        dispatcher, console = _dispatcher(runtime)
        rows = dispatcher.dispatch(ListImages())
        assert [r.as_tuple() for r in rows] == [("abcdef123456", "app:latest", "2000")]
        assert runtime.calls == [("list_images", {"all": True})]
        out = console.export_text()
        assert "Image Tag" in out
        assert "abcdef123456" in out

    def test_malformed_image_prints_nothing(self):
        runtime = FakeRuntime(images=[
            {"Id": "sha256:abcdef123456ffff", "Size": 2048000, "RepoTags": ["app:latest"]},
            {"Id": "sha256:111111222222ffff", "Size": 1024, "RepoTags": []},
        ])
        dispatcher, console = _dispatcher(runtime)
        with pytest.raises(MalformedRecordError):
            dispatcher.dispatch(ListImages())
        assert console.export_text() == ""

    def test_request_error_propagates(self):
        dispatcher, console = _dispatcher(FakeRuntime(fail_with=RuntimeRequestError("daemon said no")))
        with pytest.raises(RuntimeRequestError):
            dispatcher.dispatch(ListImages())
        assert console.export_text() == ""


class TestListRunningContainers:
    def test_exited_containers_never_listed(self):
        runtime = FakeRuntime(containers=CONTAINERS)
        dispatcher, console = _dispatcher(runtime)
        rows = dispatcher.dispatch(ListRunningContainers())
        assert [r.as_tuple() for r in rows] == [
            ("aaaaaaaaaaaa", "web-1", "nginx:alpine", "running"),
            ("cccccccccccc", "n/a", "", "running"),
        ]
        assert runtime.calls == [("list_containers", {"all": True, "filters": {"status": ["running"]}})]
        out = console.export_text()
        assert "old-job" not in out
        assert "All Running Docker Containers Info" in out

    def test_request_error_propagates(self):
        dispatcher, _ = _dispatcher(FakeRuntime(fail_with=RuntimeRequestError("boom")))
        with pytest.raises(RuntimeRequestError):
            dispatcher.dispatch(ListRunningContainers())


class TestKillContainer:
    def test_acknowledged(self):
        runtime = FakeRuntime(containers=CONTAINERS)
        dispatcher, console = _dispatcher(runtime)
        outcome = dispatcher.dispatch(KillContainer("web-1"))
        assert outcome.acknowledged
        assert outcome.signal == "SIGTERM"
        assert runtime.calls == [("kill_container", "web-1", "SIGTERM")]
        assert 'Kills Container ID: "web-1"' in console.export_text()

    def test_missing_container_still_names_it(self):
        dispatcher, console = _dispatcher(FakeRuntime(containers=CONTAINERS))
        outcome = dispatcher.dispatch(KillContainer("ghost"))
        assert not outcome.acknowledged
        assert "No such container" in outcome.reason
        assert '"ghost"' in console.export_text()

    def test_stopped_container_not_acknowledged(self):
        dispatcher, _ = _dispatcher(FakeRuntime(containers=CONTAINERS))
        outcome = dispatcher.dispatch(KillContainer("old-job"))
        assert not outcome.acknowledged

    def test_empty_name_raises(self):
        runtime = FakeRuntime()
        dispatcher, _ = _dispatcher(runtime)
        with pytest.raises(InvalidRequestError):
            dispatcher.dispatch(KillContainer(""))
        assert runtime.calls == []


class TestInspectContainer:
    def test_renders_detail(self):
        runtime = FakeRuntime(inspections={"web-1": {
            "Id": "abc", "Name": "/web-1", "Image": "sha256:img", "State": {"Status": "running"},
        }})
        dispatcher, console = _dispatcher(runtime)
        rows = dispatcher.dispatch(InspectContainer("web-1"))
        assert rows[0].as_tuple() == ("abc", "/web-1", "sha256:img", "-", "running")
        assert "Container Size" in console.export_text()

    def test_not_found(self):
        dispatcher, _ = _dispatcher(FakeRuntime())
        with pytest.raises(ContainerNotFoundError):
            dispatcher.dispatch(InspectContainer("ghost"))


def test_unknown_request_type():
    dispatcher, _ = _dispatcher(FakeRuntime())
    with pytest.raises(TypeError):
        dispatcher.dispatch(object())


def test_rejected_kill_logged_once(caplog):
    api = mock.MagicMock(spec=docker.APIClient)
    api.kill.side_effect = docker.errors.NotFound("No such container: ghost")
    dispatcher, _ = _dispatcher(RuntimeClient(Settings(), api=api))
    with caplog.at_level(logging.WARNING, logger="dockctl"):
        outcome = dispatcher.dispatch(KillContainer("ghost"))
    assert not outcome.acknowledged
    warnings = [r for r in caplog.records if r.name == "dockctl" and r.levelno >= logging.WARNING]
    assert len(warnings) == 1
    assert "ghost" in warnings[0].getMessage()
