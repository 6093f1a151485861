"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from boardprep.adapters.mock import MockAdapter
from boardprep.adapters.registry import AdapterRegistry
from boardprep.core.engine.planner import Prompter
from boardprep.core.models.config import (
    EditorSettings,
    PackageSettings,
    ProvisionConfig,
    RequiredTool,
    SharedFolderSettings,
    ToolLink,
    VerifySettings,
)
from boardprep.core.services.identity import Invoker


class ScriptedPrompter(Prompter):
    """Prompter that answers from a fixed script and remembers what it was told."""

    def __init__(self, answers: list[str]):
        self.answers = list(answers)
        self.questions: list[str] = []
        self.messages: list[str] = []
        super().__init__(ask=self._ask, say=self.messages.append)

    def _ask(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question}")
        return self.answers.pop(0)


@pytest.fixture
def prompter():
    """Factory: ``prompter("y", "share")`` builds a scripted prompter."""
    return lambda *answers: ScriptedPrompter(list(answers))


@pytest.fixture
def sandbox(tmp_path: Path) -> Path:
    """A fake filesystem root with a user's desktop and an fstab."""
    root = tmp_path / "root"
    (root / "home" / "alice" / "Desktop").mkdir(parents=True)
    (root / "etc").mkdir()
    (root / "etc" / "fstab").write_text("UUID=1234 / ext4 defaults 0 1\n")
    (root / "usr" / "bin").mkdir(parents=True)
    (root / "usr" / "bin" / "gdb-multiarch").write_text("#!/bin/sh\n")
    return root


@pytest.fixture
def sandbox_config(sandbox: Path) -> ProvisionConfig:
    """Config whose every path lives inside the sandbox."""
    return ProvisionConfig(
        packages=PackageSettings(
            commands=["apt-get update", "apt-get install -y gcc-arm-none-eabi"],
            group_command="usermod -aG dialout {user}",
        ),
        editor=EditorSettings(
            legacy_files=[str(sandbox / "etc" / "vscode.pref")],
            commands=["apt-get install -y code", "sudo -u {user} code --install-extension x.y"],
        ),
        shared_folder=SharedFolderSettings(
            mount_root=str(sandbox / "mnt" / "hgfs") + "/",
            desktop_dir=str(sandbox / "home" / "{user}" / "Desktop"),
            fstab_path=str(sandbox / "etc" / "fstab"),
        ),
        verify=VerifySettings(
            tool_links=[
                ToolLink(
                    link=str(sandbox / "usr" / "bin" / "arm-none-eabi-gdb"),
                    target=str(sandbox / "usr" / "bin" / "gdb-multiarch"),
                ),
            ],
            required_tools=[RequiredTool(name="sh", reinstall="apt-get install --reinstall -y dash")],
            report_tools=[],
        ),
    )


@pytest.fixture
def invoker(tmp_path: Path) -> Invoker:
    return Invoker(user="alice", working_dir=str(tmp_path))


@pytest.fixture
def mock_registry() -> AdapterRegistry:
    """Registry with mocks standing in for both real adapters."""
    registry = AdapterRegistry()
    registry.register(MockAdapter(adapter_name="shell"))
    registry.register(MockAdapter(adapter_name="filesystem"))
    return registry
