"""Syntax-highlighted code blocks with CSS-only tabs for multi-file snippets."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .helpers import class_names, escape_html

if typ.TYPE_CHECKING:
    from docs_html.content import Block

    from .context import RenderContext

PLAIN_TEXT = "text"

LANGUAGE_ALIASES: dict[str, str] = {
    "js": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "yml": "yaml",
    "md": "markdown",
    "c#": "csharp",
    "c++": "cpp",
    "kt": "kotlin",
    "rb": "ruby",
    "ps": "powershell",
    "ps1": "powershell",
    "dockerfile": "docker",
    "svg": "xml",
    "plaintext": PLAIN_TEXT,
    "text": PLAIN_TEXT,
}

LANGUAGE_NAMES: dict[str, str] = {
    "bash": "Bash",
    "cpp": "C++",
    "csharp": "C#",
    "css": "CSS",
    "docker": "Dockerfile",
    "go": "Go",
    "html": "HTML",
    "java": "Java",
    "javascript": "JavaScript",
    "json": "JSON",
    "jsx": "JSX",
    "kotlin": "Kotlin",
    "markdown": "Markdown",
    "php": "PHP",
    "powershell": "PowerShell",
    "python": "Python",
    "ruby": "Ruby",
    "rust": "Rust",
    "sql": "SQL",
    "swift": "Swift",
    "text": "Plain Text",
    "tsx": "TSX",
    "typescript": "TypeScript",
    "xml": "XML",
    "yaml": "YAML",
}

_FORMATTER = HtmlFormatter(nowrap=True)


@dc.dataclass(frozen=True, slots=True)
class CodeSection:
    """One file or snippet inside a code block."""

    content: str
    language: str | None = None
    filename: str | None = None


@dc.dataclass(frozen=True, slots=True)
class _RenderedSection:
    highlighted: str
    language: str
    language_name: str
    line_numbers: str
    whitespace: str


def normalize_language(value: str | None) -> str:
    """Map a declared language onto a Pygments lexer alias.

    Examples
    --------
    >>> normalize_language("JS")
    'javascript'
    >>> normalize_language(None)
    'text'
    """
    if not value:
        return PLAIN_TEXT
    raw = value.strip().lower()
    return LANGUAGE_ALIASES.get(raw, raw)


def highlight_code(code: str, language: str | None = None) -> tuple[str, str]:
    """Highlight ``code`` and return the markup with the lexer actually used.

    Unknown languages and lexer failures fall back to escaped plain text.
    """
    lexer_name = normalize_language(language)
    try:
        lexer = get_lexer_by_name(lexer_name, stripnl=False, ensurenl=False)
    except ClassNotFound:
        lexer_name = PLAIN_TEXT
        lexer = get_lexer_by_name(PLAIN_TEXT, stripnl=False, ensurenl=False)
    return highlight(code, lexer, _FORMATTER), lexer_name


def code_sections(block: Block) -> list[CodeSection]:
    """Return the sections declared by a code block, if any."""
    data = block.data
    sections = data.get("sections")
    if isinstance(sections, list) and sections:
        return [
            CodeSection(
                content=str(section.get("content") or ""),
                language=section.get("language"),
                filename=section.get("filename"),
            )
            for section in sections
            if isinstance(section, dict)
        ]
    if data.get("content"):
        return [
            CodeSection(
                content=str(data["content"]),
                language=data.get("language") or PLAIN_TEXT,
                filename=data.get("name"),
            )
        ]
    return []


def _display_name(section: CodeSection, lexer_name: str) -> str:
    declared = (section.language or "").strip().lower()
    return (
        LANGUAGE_NAMES.get(declared)
        or LANGUAGE_NAMES.get(lexer_name)
        or section.language
        or lexer_name
    )


def _render_section(
    ctx: RenderContext, section: CodeSection, *, show_line_numbers: bool, wrap: bool
) -> _RenderedSection:
    highlighted, lexer_name = highlight_code(section.content, section.language)
    line_numbers = ""
    if show_line_numbers:
        cls = class_names(
            "select-none flex-shrink-0 text-right", ctx.theme.slot("code", "lines")
        )
        numbers = "".join(
            f'<div class="leading-6 min-h-[1.5rem]">{index}</div>'
            for index in range(1, section.content.count("\n") + 2)
        )
        line_numbers = (
            f'<div class="{escape_html(cls)}"'
            f' style="padding-right:1rem;margin-right:1.25rem;">{numbers}</div>'
        )
    return _RenderedSection(
        highlighted=highlighted,
        language=lexer_name,
        language_name=_display_name(section, lexer_name),
        line_numbers=line_numbers,
        whitespace="whitespace-pre-wrap break-words" if wrap else "whitespace-pre",
    )


def _render_panel(ctx: RenderContext, segment: _RenderedSection) -> str:
    language = escape_html(segment.language)
    badge_class = class_names(
        "static-code-language-badge", ctx.theme.slot("code", "language")
    )
    return (
        '<div class="static-code-panel">'
        f'<pre class="language-{language} text-sm w-full overflow-x-auto'
        f' {escape_html(segment.whitespace)}"><div class="flex min-h-full">'
        f"{segment.line_numbers}"
        f'<div class="flex-1 relative"><code class="language-{language} block p-4">'
        f"{segment.highlighted}</code></div></div></pre>"
        f'<div class="{escape_html(badge_class)}">{escape_html(segment.language_name)}</div>'
        "</div>"
    )


def _tab_rules(block_id: str, count: int) -> str:
    selector = f"#{block_id}"
    rules = [f"{selector} .static-code-tab-panels .static-code-panel {{ display: none; }}"]
    for nth in range(1, count + 1):
        checked = f"{selector} .static-code-tab-input:nth-of-type({nth}):checked"
        rules.extend(
            (
                f"{checked} ~ .static-code-header .static-code-tab-labels"
                f" label:nth-of-type({nth}) {{ background-color: rgba(59, 130, 246, 0.24);"
                " border-color: rgba(59, 130, 246, 0.4); color: inherit; }",
                f"{checked} ~ .static-code-body .static-code-tab-panels"
                f" .static-code-panel:nth-of-type({nth}) {{ display: block; }}",
            )
        )
    return "<style>\n" + "\n".join(rules) + "\n</style>"


def render_code(ctx: RenderContext, block: Block) -> str:
    """Render a code block; multiple sections become radio-driven tabs."""
    theme = ctx.theme
    sections = code_sections(block)
    if not sections:
        cls = class_names(
            "mb-6 p-4",
            theme.slot("code", "empty", "bg-gray-50 text-gray-500 text-sm border"),
        )
        return f'<div class="{escape_html(cls)}">No code content provided</div>'

    show_line_numbers = block.data.get("showLineNumbers") is not False
    wrap = bool(block.data.get("wrapLines"))
    rendered = [
        _render_section(ctx, section, show_line_numbers=show_line_numbers, wrap=wrap)
        for section in sections
    ]
    title = (
        block.data.get("name")
        or sections[0].filename
        or LANGUAGE_NAMES.get(normalize_language(sections[0].language))
        or "Code"
    )
    block_id = ctx.session.next_code_block_id()
    safe_id = escape_html(block_id)

    inputs = labels = inline_style = ""
    if len(rendered) > 1:
        tab_name = f"{block_id}-tab"
        label_class = class_names(
            "static-code-tab-label", theme.slot("buttons", "tabSmall")
        )
        input_parts: list[str] = []
        label_parts: list[str] = []
        for index, segment in enumerate(rendered):
            option_id = escape_html(f"{block_id}-option-{index}")
            checked = " checked" if index == 0 else ""
            input_parts.append(
                f'<input type="radio" name="{escape_html(tab_name)}" id="{option_id}"'
                f' class="static-code-tab-input"{checked} />'
            )
            label_parts.append(
                f'<label class="{escape_html(label_class)}" for="{option_id}">'
                f"{escape_html(segment.language_name)}</label>"
            )
        inputs = "".join(input_parts)
        labels = (
            '<div class="static-code-tab-labels flex items-center gap-1 flex-wrap">'
            f"{''.join(label_parts)}</div>"
        )
        inline_style = _tab_rules(safe_id, len(rendered))

    panels = "".join(_render_panel(ctx, segment) for segment in rendered)
    header_class = class_names(
        "px-3 py-2 flex flex-wrap gap-2 items-center justify-between static-code-header",
        theme.slot("code", "header"),
    )
    note_class = theme.slot("code", "language", "text-xs text-gray-300")
    header = (
        f'<div class="{escape_html(header_class)}">'
        '<div class="flex items-center gap-2 min-w-0 flex-1 flex-wrap">'
        f'<span class="font-mono text-sm truncate">{escape_html(title)}</span>{labels}'
        "</div>"
        f'<span class="{escape_html(note_class)}">Static snippet (copy/download disabled)</span>'
        "</div>"
    )
    return (
        '<div class="relative mb-6 overflow-hidden rounded border border-gray-300'
        f' static-code-block" id="{safe_id}">'
        f"{inputs}{inline_style}{header}"
        f'<div class="static-code-body"><div class="static-code-tab-panels">{panels}</div></div>'
        "</div>"
    )


__all__ = [
    "LANGUAGE_ALIASES",
    "CodeSection",
    "code_sections",
    "highlight_code",
    "normalize_language",
    "render_code",
]
