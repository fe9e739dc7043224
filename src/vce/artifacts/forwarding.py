"""Forward parsed artifact switches and settings to vcpkg-artifacts."""

from vce.artifacts.errors import SwitchConflictError
from vce.artifacts.models import ParsedArguments, SwitchGroup

OPERATING_SYSTEM_SWITCHES = SwitchGroup(
    name="operating-system",
    members=("windows", "osx", "linux", "freebsd"),
    error_message=(
        "Only one operating system (--windows, --osx, --linux, --freebsd) may be specified."
    ),
)

HOST_PLATFORM_SWITCHES = SwitchGroup(
    name="host-platform",
    members=("x86", "x64", "arm", "arm64"),
    error_message="Only one host platform (--x86, --x64, --arm, --arm64) may be specified.",
)

TARGET_PLATFORM_SWITCHES = SwitchGroup(
    name="target-platform",
    members=("target:x86", "target:x64", "target:arm", "target:arm64"),
    error_message=(
        "Only one target platform (--target:x86, --target:x64, --target:arm, --target:arm64) "
        "may be specified."
    ),
)

# Checked in this order; the first violated group is reported
ARTIFACT_SWITCH_GROUPS: tuple[SwitchGroup, ...] = (
    OPERATING_SYSTEM_SWITCHES,
    HOST_PLATFORM_SWITCHES,
    TARGET_PLATFORM_SWITCHES,
)


def validate_switch_groups(
    switches: tuple[str, ...], groups: tuple[SwitchGroup, ...] = ARTIFACT_SWITCH_GROUPS
) -> None:
    """Raise SwitchConflictError for the first group with more than one switch present."""
    for group in groups:
        if group.count_present(switches) > 1:
            raise SwitchConflictError(group)


def forward_common_artifacts_arguments(
    appended_to: list[str],
    parsed: ParsedArguments,
    groups: tuple[SwitchGroup, ...] = ARTIFACT_SWITCH_GROUPS,
) -> None:
    """Append parsed switches and settings to appended_to as delegate arguments.

    Each switch becomes "--<name>" and each setting becomes "--<name>" followed
    by its value, both in parse order. Switch groups are validated after the
    switches are appended and before any setting is, so a conflict is reported
    before the delegate is ever launched.

    Raises:
        SwitchConflictError: If a group has more than one of its switches present
    """
    for switch in parsed.switches:
        appended_to.append(f"--{switch}")

    validate_switch_groups(parsed.switches, groups)

    for name, value in parsed.settings.items():
        appended_to.append(f"--{name}")
        appended_to.append(value)
