"""Scoped UTF-8 I/O for external processes.

Whisper prints the detected language name, which can be non-ASCII. On
Windows the console code page and Python's default stdio encoding would
mangle it, so both are switched to UTF-8 for the duration of a call.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager

UTF8_CODE_PAGE = 65001
_ENCODING_VAR = "PYTHONIOENCODING"


def _get_console_code_page() -> int | None:
    if sys.platform != "win32":
        return None
    import ctypes

    return ctypes.windll.kernel32.GetConsoleOutputCP() or None


def _set_console_code_page(code_page: int) -> None:
    if sys.platform != "win32":
        return
    import ctypes

    ctypes.windll.kernel32.SetConsoleOutputCP(code_page)


@contextmanager
def external_io_encoding(encoding: str = "utf-8") -> Iterator[None]:
    """Switch child-process I/O to ``encoding`` and restore on exit.

    Sets PYTHONIOENCODING (inherited by Python-based tools such as the
    Whisper CLI) and, on Windows, the console output code page. Prior
    values are restored even if the body raises.
    """
    previous_var = os.environ.get(_ENCODING_VAR)
    previous_cp = _get_console_code_page()

    os.environ[_ENCODING_VAR] = encoding
    if previous_cp is not None and previous_cp != UTF8_CODE_PAGE:
        _set_console_code_page(UTF8_CODE_PAGE)
    try:
        yield
    finally:
        if previous_var is None:
            os.environ.pop(_ENCODING_VAR, None)
        else:
            os.environ[_ENCODING_VAR] = previous_var
        if previous_cp is not None and previous_cp != UTF8_CODE_PAGE:
            _set_console_code_page(previous_cp)
