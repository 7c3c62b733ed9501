"""
HTML text sanitizer.

Single escaping boundary for text that lands inside element content. URLs bound
for attribute values (href) deliberately bypass it.
"""

from typing import Any

# Order matters: "&" first, otherwise the entities produced below get re-escaped
HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


def escape_html(value: Any) -> str:
    """
    Escape a value for safe embedding as an HTML text node.

    Any input is coerced to its string form first, so this never fails.

    Examples:
        escape_html('Built <script>alert(1)</script> tool')
        # 'Built &lt;script&gt;alert(1)&lt;/script&gt; tool'

        escape_html(42)
        # '42'
    """
    text = str(value)
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text
