"""In-memory stand-in for the lxc-* toolset."""

from __future__ import annotations

from enum import Enum

import pytest

from manage_lxc.core import LxcCommander, LxcError


class ContainerState(Enum):
    CREATED = "Created"
    RUNNING = "Running"
    STOPPED = "Stopped"
    DELETED = "Deleted"


class FakeLxcCommander(LxcCommander):
    def __init__(self) -> None:
        self.containers: dict[str, ContainerState] = {}
        self.templates: dict[str, str] = {}

    def create(self, name: str, template: str) -> None:
        if name in self.containers:
            raise LxcError("lxc-create", f"Container {name} already exists")
        self.containers[name] = ContainerState.CREATED
        self.templates[name] = template

    def start(self, name: str) -> None:
        state = self.containers.get(name)
        if state in (ContainerState.CREATED, ContainerState.STOPPED):
            self.containers[name] = ContainerState.RUNNING
            return
        if state is ContainerState.RUNNING:
            raise LxcError("lxc-start", f"Container {name} already running")
        raise LxcError("lxc-start", f"Container {name} does not exist")

    def stop(self, name: str) -> None:
        state = self.containers.get(name)
        if state is ContainerState.RUNNING:
            self.containers[name] = ContainerState.STOPPED
            return
        if state is ContainerState.STOPPED:
            raise LxcError("lxc-stop", f"Container {name} already stopped")
        raise LxcError("lxc-stop", f"Container {name} does not exist or is not running")

    def delete(self, name: str) -> None:
        state = self.containers.get(name)
        if state in (ContainerState.CREATED, ContainerState.STOPPED):
            del self.containers[name]
            self.templates.pop(name, None)
            return
        if state is ContainerState.RUNNING:
            raise LxcError("lxc-destroy", f"Container {name} is running, stop first")
        raise LxcError("lxc-destroy", f"Container {name} does not exist")

    def list(self) -> str:
        return "\n".join(
            f"{name} {state.value}"
            for name, state in self.containers.items()
            if state is not ContainerState.DELETED
        )

    def shutdown(self, name: str) -> None:
        self.stop(name)


@pytest.fixture
def commander() -> FakeLxcCommander:
    return FakeLxcCommander()
