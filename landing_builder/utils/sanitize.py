"""
Output Escaping Utilities

Everything a tenant types in the editor is served publicly, so every value
placed into generated markup goes through ``escape_html``. The five
characters ``& < > " '`` are replaced by their entity equivalents.
"""

from typing import Any

from markupsafe import Markup, escape


def escape_html(text: Any) -> str:
    """Escape a value for use in HTML text or a quoted attribute."""
    if text is None:
        return ""
    return str(escape(str(text)))


def safe(html: str) -> Markup:
    """Mark already-escaped markup as safe for template interpolation."""
    return Markup(html)
