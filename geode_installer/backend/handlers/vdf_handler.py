#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VDF Handler Module
Lenient reader for Steam's text KeyValues format (libraryfolders.vdf, appmanifest_*.acf)

The result is a flat dict keyed by dotted paths, e.g.::

    "AppState" { "installdir" "Geometry Dash" }  ->  {"AppState.installdir": "Geometry Dash"}

Malformed, truncated or unbalanced input never raises; whatever was read up to
that point is returned.
"""

import logging
from pathlib import Path
from typing import Dict, Union

# Initialize logger
logger = logging.getLogger(__name__)


class VdfCursor:
    """Source text plus the current read offset, shared by every recursion level."""

    __slots__ = ('text', 'pos')

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if index < len(self.text):
            return self.text[index]
        return ''

    def skip_whitespace(self) -> None:
        text = self.text
        while self.pos < len(text) and text[self.pos].isspace():
            self.pos += 1

    def skip_line(self) -> None:
        end = self.text.find('\n', self.pos)
        self.pos = len(self.text) if end == -1 else end

    def read_quoted(self) -> str:
        """Read a quoted string; the cursor must sit on the opening quote.

        An unterminated string runs to the end of input.
        """
        self.pos += 1
        end = self.text.find('"', self.pos)
        if end == -1:
            value = self.text[self.pos:]
            self.pos = len(self.text)
            return value
        value = self.text[self.pos:end]
        self.pos = end + 1
        return value


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _parse(cursor: VdfCursor, result: Dict[str, str]) -> None:
    # Innermost open block last; nesting depth is bounded only by input length
    prefixes = ['']
    while not cursor.at_end():
        cursor.skip_whitespace()
        if cursor.at_end():
            break

        char = cursor.peek()

        if char == '/' and cursor.peek(1) == '/':
            cursor.skip_line()
            continue

        if char == '}':
            cursor.pos += 1
            if len(prefixes) == 1:
                # An unmatched '}' at top level ends the parse like end of input.
                return
            prefixes.pop()
            continue

        if char == '"':
            key = cursor.read_quoted()
            cursor.skip_whitespace()
            following = cursor.peek()
            if following == '"':
                result[_join(prefixes[-1], key)] = cursor.read_quoted()
            elif following == '{':
                cursor.pos += 1
                prefixes.append(_join(prefixes[-1], key))
            continue

        # Stray '{' and anything unrecognised
        cursor.pos += 1


def parse_vdf(text: str) -> Dict[str, str]:
    """Parse VDF text into a flat ``{dotted.key: value}`` dict."""
    result: Dict[str, str] = {}
    _parse(VdfCursor(text), result)
    return result


def parse_vdf_file(file_path: Union[str, Path]) -> Dict[str, str]:
    """Parse a VDF file; a missing or unreadable file yields an empty dict."""
    file_path = Path(file_path)
    if not file_path.is_file():
        logger.debug(f"VDF file does not exist: {file_path}")
        return {}

    try:
        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read()
    except OSError as e:
        logger.warning(f"Could not read VDF file {file_path}: {e}")
        return {}

    data = parse_vdf(content)
    logger.debug(f"Parsed {len(data)} keys from {file_path}")
    return data
