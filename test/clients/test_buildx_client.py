import subprocess
import pytest
from release_images.clients.buildx_client import BuildxClient
from release_images.errors import ImageBuildError


class DummyResult:
    def __init__(self, returncode):
        self.returncode = returncode


def test_build_and_push_command(monkeypatch):
    calls = []
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: calls.append((cmd, kwargs)) or DummyResult(0))
    BuildxClient().build_and_push(
        builder="b1",
        dockerfile="config/api.Dockerfile",
        context=".",
        platform="linux/amd64",
        tags=["reg/team/api:latest"],
        cache_from="reg/team/api:buildcache",
        cache_to="reg/team/api:buildcache",
        cwd="/work",
    )
    cmd, kwargs = calls[0]
    assert cmd == [
        "docker", "buildx", "build", "--builder", "b1",
        "--file", "config/api.Dockerfile", "--platform", "linux/amd64",
        "--tag", "reg/team/api:latest",
        "--cache-from", "type=registry,ref=reg/team/api:buildcache",
        "--cache-to", "type=registry,ref=reg/team/api:buildcache,mode=max",
        "--push", ".",
    ]
    assert kwargs["cwd"] == "/work"


def test_build_without_cache_from(monkeypatch):
    calls = []
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: calls.append(cmd) or DummyResult(0))
    BuildxClient().build_and_push("b1", "f", ".", "linux/amd64", ["t:latest"], None, "t:buildcache")
    assert "--cache-from" not in calls[0]
    assert "--cache-to" in calls[0]


def test_build_failure(monkeypatch):
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: DummyResult(1))
    with pytest.raises(ImageBuildError) as exc:
        BuildxClient().build_and_push("b1", "f", ".", "linux/amd64", ["t:latest"], None, None)
    assert exc.value.returncode == 1


def test_create_builder_failure(monkeypatch):
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: DummyResult(1))
    with pytest.raises(ImageBuildError):
        BuildxClient().create_builder("b1")


def test_remove_builder_failure_is_not_fatal(monkeypatch):
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: DummyResult(1))
    BuildxClient().remove_builder("b1")


def test_dry_run_runs_nothing(monkeypatch):
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: pytest.fail("should not run"))
    client = BuildxClient(dry_run=True)
    client.create_builder("b1")
    client.build_and_push("b1", "f", ".", "linux/amd64", ["t:latest"], None, None)
    client.remove_builder("b1")
