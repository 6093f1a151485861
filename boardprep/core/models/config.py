"""
Provisioning configuration — what gets installed and where.

Loaded from boardprep.yml when one exists. Every field has a default,
so an absent file provisions the stock ARM Cortex-M toolchain setup.

Command strings may use ``{user}``, ``{folder}`` and ``{mount_root}``
placeholders; they are filled in when the plan is built.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


def _default_package_commands() -> list[str]:
    return [
        "apt-get update",
        "apt-get install -y build-essential git cmake ninja-build pkg-config",
        "apt-get install -y gcc-arm-none-eabi binutils-arm-none-eabi libnewlib-arm-none-eabi",
        "apt-get install -y gdb-multiarch openocd stlink-tools",
        "apt-get install -y minicom screen python3-pip python3-venv",
        "apt-get install -y open-vm-tools open-vm-tools-desktop",
        "apt-get remove -y modemmanager",
    ]


def _default_editor_commands() -> list[str]:
    return [
        "apt-get install -y wget gpg apt-transport-https",
        "wget -qO- https://packages.microsoft.com/keys/microsoft.asc"
        " | gpg --dearmor --yes -o /usr/share/keyrings/packages.microsoft.gpg",
        "echo 'deb [arch=amd64,arm64,armhf signed-by=/usr/share/keyrings/packages.microsoft.gpg]"
        " https://packages.microsoft.com/repos/code stable main'"
        " > /etc/apt/sources.list.d/vscode.list",
        "apt-get update",
        "apt-get install -y code",
        "sudo -u {user} code --install-extension marus25.cortex-debug",
        "sudo -u {user} code --install-extension ms-vscode.cpptools",
    ]


class PackageSettings(BaseModel):
    """Fixed package-manager invocations, run in order."""

    commands: list[str] = Field(default_factory=_default_package_commands)
    group_command: str = "usermod -aG dialout,plugdev {user}"


class EditorSettings(BaseModel):
    """Editor repository and install steps."""

    # Stale files from older editor installs that break the repository setup
    legacy_files: list[str] = Field(
        default_factory=lambda: ["/etc/apt/preferences.d/vscode.pref"]
    )
    commands: list[str] = Field(default_factory=_default_editor_commands)


class SharedFolderSettings(BaseModel):
    """Host shared folder mounted inside the VM and linked on the desktop."""

    mount_root: str = "/mnt/hgfs/"
    desktop_dir: str = "/home/{user}/Desktop"
    fstab_path: str = "/etc/fstab"
    fstab_line: str = ".host:/ {mount_root} fuse.vmhgfs-fuse defaults,allow_other 0 0"


class ToolLink(BaseModel):
    """A symlink that makes one toolchain binary answer to another name."""

    link: str
    target: str


class RequiredTool(BaseModel):
    """A binary that must resolve on PATH, and how to bring it back."""

    name: str
    reinstall: str


class VerifySettings(BaseModel):
    """Post-install verification steps."""

    tool_links: list[ToolLink] = Field(
        default_factory=lambda: [
            ToolLink(link="/usr/bin/arm-none-eabi-gdb", target="/usr/bin/gdb-multiarch"),
        ]
    )
    required_tools: list[RequiredTool] = Field(
        default_factory=lambda: [
            RequiredTool(name="openocd", reinstall="apt-get install --reinstall -y openocd"),
        ]
    )
    # Tools listed in the read-only report after a verify run
    report_tools: list[str] = Field(
        default_factory=lambda: [
            "arm-none-eabi-gcc",
            "arm-none-eabi-gdb",
            "openocd",
            "st-flash",
            "cmake",
            "code",
        ]
    )


class SupportSettings(BaseModel):
    contact: str = "your lab administrator"


class AuditSettings(BaseModel):
    directory: str = "."


class ProvisionConfig(BaseModel):
    """Root provisioning configuration."""

    version: int = 1

    packages: PackageSettings = Field(default_factory=PackageSettings)
    editor: EditorSettings = Field(default_factory=EditorSettings)
    shared_folder: SharedFolderSettings = Field(default_factory=SharedFolderSettings)
    verify: VerifySettings = Field(default_factory=VerifySettings)
    support: SupportSettings = Field(default_factory=SupportSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)
