#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Registry Handler Module
Adds the xinput1_4 DLL override Geode needs to a Wine prefix's user.reg
"""

import time
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from geode_installer.backend.errors import RegistryFileNotFoundError, RegistryIOError

# Initialize logger
logger = logging.getLogger(__name__)

DLL_OVERRIDES_SECTION = "[Software\\\\Wine\\\\DllOverrides]"
XINPUT_KEY = '"xinput1_4"='
XINPUT_ENTRY = '"xinput1_4"="native,builtin"'
USER_REG = "user.reg"


def current_timestamp() -> int:
    return int(time.time())


class RegistryHandler:
    """
    Edits Wine registry files as plain text.

    Only the one override entry is ever added; everything else in the file is
    left byte-for-byte as it was.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self.clock = clock or current_timestamp

    def patch_wine_registry(self, prefix: Union[str, Path]) -> bool:
        """
        Ensure prefix/user.reg loads xinput1_4 as native,builtin.

        Returns:
            bool: True if the file was rewritten, False if it already had the entry

        Raises:
            RegistryFileNotFoundError: user.reg does not exist
            RegistryIOError: user.reg could not be read or written
        """
        user_reg = Path(prefix) / USER_REG
        if not user_reg.exists():
            raise RegistryFileNotFoundError(user_reg)

        try:
            with open(user_reg, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise RegistryIOError(user_reg, "read", e) from e

        patched = self.ensure_dll_override(content)
        if patched == content:
            logger.info(f"xinput1_4 override already present in {user_reg}")
            return False

        try:
            with open(user_reg, 'w', encoding='utf-8', newline='') as f:
                f.write(patched)
        except OSError as e:
            raise RegistryIOError(user_reg, "write", e) from e

        logger.info(f"Added xinput1_4 override to {user_reg}")
        return True

    def ensure_dll_override(self, content: str) -> str:
        """Return content with the xinput1_4 override present exactly once."""
        if XINPUT_KEY in content:
            return content

        if DLL_OVERRIDES_SECTION not in content:
            return self._add_dll_overrides_section(content)
        return self._add_dll_entry_to_section(content, DLL_OVERRIDES_SECTION, XINPUT_ENTRY)

    def _add_dll_overrides_section(self, content: str) -> str:
        timestamp = self.clock()
        logger.debug(f"Creating DllOverrides section with timestamp {timestamp}")
        return content + (
            f"\n\n{DLL_OVERRIDES_SECTION} {timestamp}\n"
            f"#time={timestamp:x}\n"
            f"{XINPUT_ENTRY}\n"
        )

    @staticmethod
    def _add_dll_entry_to_section(content: str, section: str, entry: str) -> str:
        section_pos = content.find(section)
        search_start = section_pos + len(section)
        next_section = content.find("\n[", search_start)
        insert_pos = len(content) if next_section == -1 else next_section

        # The entry must start on its own line.
        if content[:insert_pos].endswith("\n"):
            line = f"{entry}\n"
        elif next_section == -1:
            line = f"\n{entry}\n"
        else:
            line = f"\n{entry}"
        return content[:insert_pos] + line + content[insert_pos:]
