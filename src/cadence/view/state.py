# SPDX-License-Identifier: MIT

"""Display state shared by the views, kept in context variables."""

from contextvars import ContextVar

# Default is True (show headers)
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    """Set whether headers should be displayed above tables.

    Args:
        value: True to show headers, False to hide them
    """
    _show_header_var.set(value)


def get_show_header() -> bool:
    """Get whether headers should be displayed above tables."""
    return _show_header_var.get()
