"""
Tests for the plan builder — sub-plans, prechecks and idempotence.
"""

import os
from pathlib import Path

import pytest

from boardprep.adapters.registry import AdapterRegistry
from boardprep.core.engine.executor import execute_plan
from boardprep.core.engine.planner import (
    add_editor_set,
    add_package_set,
    add_shared_folder_set,
    add_verification_set,
    ask_yes_no,
    fill,
)
from boardprep.core.models.config import RequiredTool
from boardprep.core.models.operation import Operation
from boardprep.core.models.plan import Plan


class TestFill:
    def test_known_placeholders(self):
        assert fill("usermod -aG dialout {user}", user="alice") == "usermod -aG dialout alice"

    def test_unknown_placeholders_kept(self):
        assert fill("awk '{print}' {user}", user="bob") == "awk '{print}' bob"

    @pytest.mark.parametrize("command", [
        "find /tmp -name x -exec rm {} +",
        "ls | xargs -I{} echo {}",
        "echo {0} {1}",
    ])
    def test_literal_braces_pass_through(self, command):
        assert fill(command, user="alice") == command

    def test_package_command_with_empty_braces(self, sandbox_config):
        sandbox_config.packages.commands = ["find /tmp -name x -exec rm {} +"]
        sandbox_config.packages.group_command = "usermod -aG dialout {user}"
        plan = Plan()
        add_package_set(plan, sandbox_config, "alice")
        assert plan.commands == [
            "find /tmp -name x -exec rm {} +",
            "usermod -aG dialout alice",
        ]


# ── Package set ─────────────────────────────────────────────────────


class TestPackageSet:
    def test_fixed_sequence_then_group(self, sandbox_config):
        plan = Plan()
        added = add_package_set(plan, sandbox_config, "alice")
        assert added == 3
        assert plan.commands == [
            "apt-get update",
            "apt-get install -y gcc-arm-none-eabi",
            "usermod -aG dialout alice",
        ]
        assert all(op.adapter == "shell" for op in plan)

    def test_appends_to_existing_plan(self, sandbox_config):
        plan = Plan()
        plan.add(Operation.shell("echo earlier"))
        add_package_set(plan, sandbox_config, "alice")
        assert plan.commands[0] == "echo earlier"
        assert len(plan) == 4

    def test_empty_group_command_skipped(self, sandbox_config):
        sandbox_config.packages.group_command = ""
        plan = Plan()
        assert add_package_set(plan, sandbox_config, "alice") == 2


# ── Editor set ──────────────────────────────────────────────────────


class TestEditorSet:
    def test_no_legacy_file(self, sandbox_config):
        plan = Plan()
        add_editor_set(plan, sandbox_config, "alice")
        assert plan.commands == [
            "apt-get install -y code",
            "sudo -u alice code --install-extension x.y",
        ]

    def test_legacy_file_removed_first(self, sandbox, sandbox_config):
        legacy = sandbox / "etc" / "vscode.pref"
        legacy.write_text("Package: code\n")
        plan = Plan()
        add_editor_set(plan, sandbox_config, "alice")
        first = plan.operations[0]
        assert first.adapter == "filesystem"
        assert first.params == {"operation": "remove", "path": str(legacy)}
        assert len(plan) == 3


# ── Shared-folder set ───────────────────────────────────────────────


class TestYesNo:
    def test_case_insensitive(self, prompter):
        assert ask_yes_no("?", prompter("YES"))
        assert ask_yes_no("?", prompter("Y"))
        assert not ask_yes_no("?", prompter("No"))

    def test_reprompts_on_invalid(self, prompter):
        p = prompter("maybe", "", "n")
        assert not ask_yes_no("?", p)
        assert len(p.questions) == 3
        assert len(p.messages) == 2


class TestSharedFolderSet:
    def test_declined_adds_nothing(self, sandbox_config, prompter):
        plan = Plan()
        p = prompter("n")
        assert add_shared_folder_set(plan, sandbox_config, "alice", p) == 0
        assert len(plan) == 0
        assert len(p.questions) == 1  # never asked for a folder name

    def test_fresh_system_gets_all_three(self, sandbox, sandbox_config, prompter):
        plan = Plan()
        add_shared_folder_set(plan, sandbox_config, "alice", prompter("y", "share"))
        ops = plan.operations
        assert [op.params["operation"] for op in ops] == ["mkdir", "symlink", "append_line"]
        assert ops[1].params["path"] == str(sandbox / "home" / "alice" / "Desktop" / "share")
        assert ops[1].params["target"] == str(sandbox / "mnt" / "hgfs" / "share")
        assert ops[2].params["content"] == (
            f".host:/ {sandbox / 'mnt' / 'hgfs'} fuse.vmhgfs-fuse defaults,allow_other 0 0"
        )

    def test_invalid_folder_name_reprompts(self, sandbox_config, prompter):
        p = prompter("y", "", "a/b", "share")
        plan = Plan()
        add_shared_folder_set(plan, sandbox_config, "alice", p)
        assert len(p.messages) == 2
        assert plan.operations[1].params["path"].endswith("/share")

    def test_existing_root_and_link_only_mount_entry(self, sandbox, sandbox_config, prompter):
        (sandbox / "mnt" / "hgfs").mkdir(parents=True)
        os.symlink(sandbox / "mnt" / "hgfs" / "share", sandbox / "home" / "alice" / "Desktop" / "share")

        plan = Plan()
        add_shared_folder_set(plan, sandbox_config, "alice", prompter("y", "share"))
        assert [op.params["operation"] for op in plan] == ["append_line"]

    def test_everything_present_adds_nothing(self, sandbox, sandbox_config, prompter):
        (sandbox / "mnt" / "hgfs").mkdir(parents=True)
        os.symlink(sandbox / "mnt" / "hgfs" / "share", sandbox / "home" / "alice" / "Desktop" / "share")
        line = f".host:/ {sandbox / 'mnt' / 'hgfs'} fuse.vmhgfs-fuse defaults,allow_other 0 0"
        with open(sandbox / "etc" / "fstab", "a") as f:
            f.write(line + "\n")

        plan = Plan()
        assert add_shared_folder_set(plan, sandbox_config, "alice", prompter("y", "share")) == 0

    def test_second_run_does_not_duplicate_mount_entry(self, sandbox, sandbox_config, prompter, tmp_path):
        registry = AdapterRegistry.default()

        first = Plan()
        add_shared_folder_set(first, sandbox_config, "alice", prompter("y", "share"))
        report = execute_plan(first, registry, working_dir=str(tmp_path))
        assert report.ok

        second = Plan()
        added = add_shared_folder_set(second, sandbox_config, "alice", prompter("y", "share"))
        assert added == 0

        fstab = (sandbox / "etc" / "fstab").read_text().splitlines()
        assert sum(1 for line in fstab if line.startswith(".host:/")) == 1


# ── Verification set ────────────────────────────────────────────────


class TestVerificationSet:
    def test_missing_link_enqueued(self, sandbox, sandbox_config):
        plan = Plan()
        assert add_verification_set(plan, sandbox_config) == 1
        op = plan.operations[0]
        assert op.params["operation"] == "symlink"
        assert op.params["path"] == str(sandbox / "usr" / "bin" / "arm-none-eabi-gdb")

    def test_real_binary_at_link_path_is_enough(self, sandbox, sandbox_config):
        (sandbox / "usr" / "bin" / "arm-none-eabi-gdb").write_text("#!/bin/sh\n")
        plan = Plan()
        assert add_verification_set(plan, sandbox_config) == 0

    def test_unresolvable_tool_reinstalled(self, sandbox, sandbox_config):
        os.symlink(sandbox / "usr" / "bin" / "gdb-multiarch", sandbox / "usr" / "bin" / "arm-none-eabi-gdb")
        sandbox_config.verify.required_tools = [
            RequiredTool(name="definitely-not-installed-boardprep-tool", reinstall="apt-get install --reinstall -y x"),
        ]
        plan = Plan()
        add_verification_set(plan, sandbox_config)
        assert plan.commands == ["apt-get install --reinstall -y x"]

    def test_second_run_is_empty(self, sandbox_config, tmp_path):
        first = Plan()
        add_verification_set(first, sandbox_config)
        report = execute_plan(first, AdapterRegistry.default(), working_dir=str(tmp_path))
        assert report.ok

        second = Plan()
        assert add_verification_set(second, sandbox_config) == 0
