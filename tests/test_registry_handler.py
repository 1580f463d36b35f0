from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from geode_installer.backend.errors import GeodeInstallerError, RegistryFileNotFoundError, RegistryIOError
from geode_installer.backend.handlers.registry_handler import (
    DLL_OVERRIDES_SECTION,
    XINPUT_ENTRY,
    XINPUT_KEY,
    RegistryHandler,
)

FIXED_TIME = 1700000000

HEADER = (
    "WINE REGISTRY Version 2\n"
    r";; All keys relative to \\User\\S-1-5-21-0-0-0-1000" "\n"
    "\n"
    "#arch=win64\n"
    "\n"
    r"[Control Panel\\Desktop] 1699990000" "\n"
    "#time=1da1b2c3d4e5f60\n"
    '"DragFullWindows"="0"\n'
)

DLL_SECTION = (
    "\n"
    r"[Software\\Wine\\DllOverrides] 1699990000" "\n"
    "#time=1da1b2c3d4e5f60\n"
    '"d3d11"="native"\n'
)

TRAILER = (
    "\n"
    r"[Software\\Wine\\X11 Driver] 1699990000" "\n"
    "#time=1da1b2c3d4e5f60\n"
    '"Decorated"="Y"\n'
)


@pytest.fixture
def handler() -> RegistryHandler:
    return RegistryHandler(clock=lambda: FIXED_TIME)


def test_markers_match_wine_file_syntax() -> None:
    assert DLL_OVERRIDES_SECTION == r"[Software\\Wine\\DllOverrides]"
    assert XINPUT_ENTRY == '"xinput1_4"="native,builtin"'


def test_missing_section_is_appended(handler: RegistryHandler) -> None:
    content = HEADER + TRAILER
    patched = handler.ensure_dll_override(content)

    assert patched == content + (
        "\n\n"
        r"[Software\\Wine\\DllOverrides] 1700000000" "\n"
        "#time=6553f100\n"
        '"xinput1_4"="native,builtin"\n'
    )
    assert patched.count(DLL_OVERRIDES_SECTION) == 1
    assert patched.count(XINPUT_KEY) == 1


def test_section_timestamps_match(handler: RegistryHandler) -> None:
    patched = handler.ensure_dll_override("")
    header_line, time_line = patched.strip().splitlines()[:2]
    decimal = int(header_line.rsplit(" ", 1)[1])
    assert int(time_line.split("=", 1)[1], 16) == decimal


def test_entry_inserted_before_next_section(handler: RegistryHandler) -> None:
    content = HEADER + DLL_SECTION + TRAILER
    patched = handler.ensure_dll_override(content)

    expected_section = DLL_SECTION + XINPUT_ENTRY + "\n"
    assert patched == HEADER + expected_section + TRAILER


def test_entry_appended_when_section_is_last(handler: RegistryHandler) -> None:
    content = HEADER + DLL_SECTION
    patched = handler.ensure_dll_override(content)

    assert patched == content + XINPUT_ENTRY + "\n"


def test_entry_gets_own_line_without_trailing_newline(handler: RegistryHandler) -> None:
    content = HEADER + DLL_SECTION.rstrip("\n")
    patched = handler.ensure_dll_override(content)

    assert patched == content + "\n" + XINPUT_ENTRY + "\n"


def test_entry_gets_own_line_when_next_section_is_adjacent(handler: RegistryHandler) -> None:
    content = DLL_SECTION.strip("\n") + "\n" + TRAILER.strip("\n") + "\n"
    patched = handler.ensure_dll_override(content)

    assert '"d3d11"="native"\n"xinput1_4"="native,builtin"\n[Software' in patched
    assert patched.replace(XINPUT_ENTRY + "\n", "", 1) == content


def test_existing_entry_is_left_alone(handler: RegistryHandler) -> None:
    content = HEADER + DLL_SECTION + '"xinput1_4"="builtin"\n' + TRAILER
    assert handler.ensure_dll_override(content) == content


def test_existing_entry_anywhere_counts(handler: RegistryHandler) -> None:
    # Exact substring containment, not section-aware
    content = HEADER + '"xinput1_4"="native"\n'
    assert handler.ensure_dll_override(content) == content


FRAGMENTS = st.sampled_from(
    [HEADER, DLL_SECTION, TRAILER, "\n", "[Other] 1\n", '"a"="b"\n', XINPUT_ENTRY + "\n", "garbage", "\n[", ""]
)


@given(parts=st.lists(FRAGMENTS, max_size=8))
def test_ensure_is_idempotent(parts) -> None:
    handler = RegistryHandler(clock=lambda: FIXED_TIME)
    content = "".join(parts)

    once = handler.ensure_dll_override(content)
    twice = handler.ensure_dll_override(once)

    assert twice == once
    assert once.count(XINPUT_KEY) == max(1, content.count(XINPUT_KEY))


@given(parts=st.lists(FRAGMENTS, max_size=8))
def test_ensure_only_inserts(parts) -> None:
    handler = RegistryHandler(clock=lambda: FIXED_TIME)
    content = "".join(parts)
    patched = handler.ensure_dll_override(content)

    if XINPUT_KEY in content:
        assert patched == content
    else:
        # Removing the one inserted entry line gives back the original bytes
        # (plus the synthesized section block when it was missing).
        assert len(patched) > len(content)
        if DLL_OVERRIDES_SECTION in content:
            index = patched.index(XINPUT_ENTRY)
            rebuilt = patched[:index] + patched[index + len(XINPUT_ENTRY):]
            assert rebuilt.replace("\n", "") == content.replace("\n", "")
        else:
            assert patched.startswith(content)


def test_patch_missing_user_reg(tmp_path: Path, handler: RegistryHandler) -> None:
    with pytest.raises(RegistryFileNotFoundError) as excinfo:
        handler.patch_wine_registry(tmp_path)
    assert isinstance(excinfo.value, FileNotFoundError)
    assert isinstance(excinfo.value, GeodeInstallerError)
    assert excinfo.value.path == tmp_path / "user.reg"
    assert "user.reg" in excinfo.value.message


def test_patch_writes_once(tmp_path: Path, handler: RegistryHandler) -> None:
    user_reg = tmp_path / "user.reg"
    user_reg.write_text(HEADER + DLL_SECTION + TRAILER, encoding="utf-8")

    assert handler.patch_wine_registry(tmp_path) is True
    first = user_reg.read_text(encoding="utf-8")
    assert first.count(XINPUT_KEY) == 1

    assert handler.patch_wine_registry(tmp_path) is False
    assert user_reg.read_text(encoding="utf-8") == first


def test_patch_accepts_string_prefix(tmp_path: Path, handler: RegistryHandler) -> None:
    (tmp_path / "user.reg").write_text(HEADER, encoding="utf-8")
    assert handler.patch_wine_registry(str(tmp_path)) is True


def test_patch_unreadable_user_reg(tmp_path: Path, handler: RegistryHandler) -> None:
    (tmp_path / "user.reg").mkdir()
    with pytest.raises(RegistryIOError) as excinfo:
        handler.patch_wine_registry(tmp_path)
    assert excinfo.value.operation == "read"
    assert excinfo.value.path == tmp_path / "user.reg"


def test_default_clock_is_used() -> None:
    patched = RegistryHandler().ensure_dll_override("")
    assert patched.startswith("\n\n" + DLL_OVERRIDES_SECTION + " ")
