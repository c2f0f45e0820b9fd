"""Text rendering helpers for generated TypeScript

Generators build declarations from unindented fragments; format_typescript
indents the assembled text by brace depth.
"""

from typing import Any, List

INDENT = "  "


def render_value(value: Any) -> str:
    """Render one fragment

    None and False render as nothing. Lists are flattened: elements are
    separated by blank lines when any element spans several lines, by
    single newlines otherwise.
    """
    if value is None or value is False:
        return ""

    if isinstance(value, (list, tuple)):
        rendered = [text for text in (render_value(element) for element in value) if text]
        separator = "\n\n" if any("\n" in text for text in rendered) else "\n"
        return separator.join(rendered)

    return str(value)


def render(*parts: Any) -> str:
    """Join non-empty fragments as lines"""
    rendered = [render_value(part) for part in parts]
    return "\n".join(text for text in rendered if text).strip()


def render_blocks(*parts: Any) -> str:
    """Join non-empty fragments separated by blank lines"""
    rendered = [render_value(part) for part in parts]
    return "\n\n".join(text for text in rendered if text).strip()


def format_typescript(text: str) -> str:
    """Indent declaration text by brace depth

    Braces inside comment lines are not counted. Runs of blank lines
    collapse to one; blank lines right after ``{`` or before ``}`` are
    dropped.
    """
    lines: List[str] = []
    depth = 0
    in_comment = False

    for raw in text.split("\n"):
        line = raw.strip()

        if not line:
            if lines and lines[-1] and not lines[-1].endswith("{"):
                lines.append("")
            continue

        if in_comment or line.startswith("/*") or line.startswith("//"):
            if line.startswith("/*"):
                in_comment = "*/" not in line
            elif in_comment and "*/" in line:
                in_comment = False
            prefix = " " if line.startswith("*") else ""
            lines.append(INDENT * depth + prefix + line)
            continue

        opens = line.count("{")
        closes = line.count("}")

        if line.startswith("}"):
            depth = max(depth - 1, 0)
            closes -= 1
            if lines and not lines[-1]:
                lines.pop()

        lines.append(INDENT * depth + line)
        depth = max(depth + opens - closes, 0)

    while lines and not lines[-1]:
        lines.pop()

    return "\n".join(lines) + "\n"
