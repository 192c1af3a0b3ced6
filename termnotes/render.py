"""Build rich renderables for each mode.

Rendering is a pure function of the controller state, the active theme and the
terminal size, which is re-read before every frame.
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .app import AppState, Mode
from .links import LinkField
from .models import Link, Note
from .navigator import ListNavigator
from .session import Focus, NoteEditSession
from .text_buffer import TextBuffer
from .themes import priority_color
from .viewer import ViewModeController

APP_TITLE = "Terminal Notes"
EMPTY_MESSAGE = "No notes yet. Press 'i' to create your first note."
LIST_HELP = "j/k=↓/↑ | g=top | G=bottom | s=sort | 1/2/3/4=priority | x=obscure | i=insert | Enter=view | e=edit | d=delete | q=quit"
EMPTY_HELP = "i=insert | q=quit"
DELETE_PROMPT = "DELETE THIS NOTE? d=delete | n/ESC=cancel"
LINK_HELP = "Enter URL and title | ESC=cancel link"


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


def content_width(width: int) -> int:
    return max(10, width - 60)


def format_date(note: Note) -> str:
    return note.created.astimezone().strftime("%Y-%m-%d")


def format_datetime(value) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def buffer_text(buffer: TextBuffer, *, focused: bool, style: str = "", placeholder: str = "") -> Text:
    """Render a buffer, drawing the cursor as a reversed cell when focused."""
    if not focused:
        if not buffer.text and placeholder:
            return Text(placeholder, style="dim")
        return Text(buffer.text, style=style)

    text, cursor = buffer.text, buffer.cursor
    if not text and placeholder:
        out = Text(" ", style="reverse")
        out.append(placeholder, style="dim")
        return out
    out = Text(text[:cursor], style=style)
    if cursor >= len(text) or text[cursor] == "\n":
        out.append(" ", style="reverse")
        out.append(text[cursor:], style=style)
    else:
        out.append(text[cursor], style="reverse")
        out.append(text[cursor + 1 :], style=style)
    return out


def cursor_position(buffer: TextBuffer) -> Text:
    line, column = buffer.line_and_column()
    return Text(f"Ln {line + 1}/{len(buffer.lines())}, Col {column + 1}", style="dim")


def link_line(link: Link, theme: dict[str, str], *, selected: bool = False) -> Text:
    invert = " reverse" if selected else ""
    line = Text()
    if link.has_distinct_title:
        line.append(f" {link.title} ", style=f"{theme['primary']}{invert}")
        line.append(f"  - {link.url} ", style=f"dim{invert}")
    else:
        line.append(f" {link.url} ", style=f"{theme['primary']}{invert}")
    return line


def _links_block(links, theme: dict[str, str], selected: int | None = None) -> list[RenderableType]:
    if not links:
        return []
    block: list[RenderableType] = [Text(""), Text("Links:", style=f"bold {theme['primary']}")]
    block.extend(link_line(link, theme, selected=(i == selected)) for i, link in enumerate(links))
    return block


def _status(state: AppState, theme: dict[str, str]) -> list[RenderableType]:
    return [Text(state.status, style=theme["warning"])] if state.status else []


# -- list mode -------------------------------------------------------------


def render_list(state: AppState, theme: dict[str, str], width: int, height: int) -> RenderableType:
    notes = state.sorted_notes
    navigator: ListNavigator = state.navigator

    if not notes:
        return Group(
            Text(APP_TITLE, style=f"bold {theme['secondary']}"),
            Text(""),
            Text(EMPTY_MESSAGE, style="dim"),
            Text(""),
            *_status(state, theme),
            Panel(Text(EMPTY_HELP, style="dim"), border_style="grey50"),
        )

    offset, size = navigator.window(len(notes), height)

    header = Text(f"{APP_TITLE} ({len(notes)})", style=f"bold {theme['primary']}")
    if len(notes) > size:
        header.append(f" [{navigator.selected_index + 1}/{len(notes)}]", style="dim")
    header.append(" | Sort: ", style=f"dim {theme['primary']}")
    header.append(navigator.sort_mode.label, style=theme["primary"])

    rows = Table.grid(expand=True)
    rows.add_column(ratio=1, no_wrap=True, overflow="ellipsis")
    rows.add_column(justify="right", no_wrap=True)
    max_len = content_width(width)
    for index in range(offset, offset + size):
        note = notes[index]
        invert = " reverse bold" if index == navigator.selected_index else ""
        summary = truncate(note.display_content.replace("\n", " "), max_len)
        right = Text()
        right.append(f" {note.priority.marker} ", style=f"bold {priority_color(theme, note.priority)}{invert}")
        right.append(format_date(note), style=f"{theme['primary']}{invert}")
        rows.add_row(Text(f" {note.title} - {summary}", style=f"{theme['primary']}{invert}"), right)

    return Group(
        header,
        Text(""),
        rows,
        Text(""),
        *_status(state, theme),
        Text(LIST_HELP, style="dim"),
    )


# -- edit mode -------------------------------------------------------------


def render_editor(session: NoteEditSession, theme: dict[str, str]) -> RenderableType:
    primary = theme["primary"]
    draft = session.draft
    adding = session.adding_link
    focus = None if adding else session.focus

    title_line = Text()
    if focus is Focus.TITLE:
        title_line.append_text(buffer_text(draft.title, focused=True, placeholder="Enter note title..."))
    else:
        title_line.append(f" {draft.title.text or 'Untitled'} ", style=f"reverse {primary}")
        if not adding:
            title_line.append(" (↑ to edit)", style=primary)

    priority_line = Text("Priority: ", style=primary)
    priority_style = f"bold {priority_color(theme, draft.priority)}"
    if focus is Focus.PRIORITY:
        priority_line.append(f" {draft.priority.value.upper()} ", style=f"reverse {priority_style}")
        priority_line.append(" (←/→ or h/l)", style=primary)
    else:
        priority_line.append(draft.priority.value, style=priority_style)
        if session.layout.priority_cycle and not adding:
            priority_line.append(" (Tab)", style=f"dim {primary}")
    if draft.obscured:
        priority_line.append("  [obscured]", style=theme["warning"])

    head = Table.grid(expand=True)
    head.add_column(ratio=1)
    head.add_column(justify="right")
    head.add_row(title_line, priority_line)

    body: list[RenderableType] = []
    if focus is Focus.CONTENT:
        body.append(buffer_text(draft.content, focused=True, placeholder="Enter note content..."))
        body.append(cursor_position(draft.content))
    else:
        body.append(Text(draft.content.text or "(empty)", style=primary))
        if not adding:
            body.append(Text("(↓ to edit)", style=primary))

    if adding:
        body.append(Text(""))
        body.append(render_link_entry(session, theme))
    else:
        body.extend(_links_block(draft.links, theme))

    if adding:
        help_text = LINK_HELP
    else:
        parts = ["↑/↓=switch field"]
        if session.layout.priority_cycle:
            parts.append("Tab=cycle priority")
        if session.layout.obscured:
            parts.append("Ctrl+X=toggle obscured")
        if session.layout.links:
            parts.append("Ctrl+L=add link")
        parts.append("ESC=cancel")
        help_text = " | ".join(parts)
    footer = Text(help_text, style="dim")
    footer.append("  Ctrl+S=save ", style=primary)

    return Group(
        Panel(head, border_style=primary),
        Panel(Group(*body), border_style=primary, padding=(1, 1)),
        footer,
    )


def render_link_entry(session: NoteEditSession, theme: dict[str, str]) -> RenderableType:
    flow = session.link_flow
    primary = theme["primary"]
    lines: list[RenderableType] = []

    url_line = Text("URL: ", style=f"bold {primary}")
    if flow.input_field is LinkField.URL:
        url_line.append_text(buffer_text(flow.draft.url, focused=True, placeholder="https://example.com"))
        url_line.append(f"  {flow.url_hint}", style="dim")
    else:
        url_line.append(flow.draft.url.text, style=primary)
    lines.append(url_line)

    if flow.input_field is LinkField.TITLE:
        title_line = Text("Title: ", style=f"bold {primary}")
        title_line.append_text(buffer_text(flow.draft.title, focused=True, placeholder="Optional title"))
        lines.append(title_line)

    return Panel(Group(*lines), title="Add Link", title_align="left", border_style=primary)


def render_viewer(viewer: ViewModeController, theme: dict[str, str]) -> RenderableType:
    primary = theme["primary"]
    note = viewer.note

    head = Table.grid(expand=True)
    head.add_column(ratio=1)
    head.add_column(justify="right")
    priority = Text("Priority: ", style=primary)
    priority.append(note.priority.value, style=f"bold {priority_color(theme, note.priority)}")
    head.add_row(Text(note.title or "Untitled", style=f"bold {primary}"), priority)

    body: list[RenderableType] = [Text(note.display_content or "(empty)", style=primary)]
    body.extend(_links_block(note.links, theme, selected=viewer.selected_link_index))

    parts = ["Enter=edit"]
    if viewer.layout.obscured:
        parts.append("X=toggle obscured")
    if note.links:
        parts.append("↑/↓=navigate links | O=open link | D=delete link")
    parts.append("ESC=back")

    return Group(
        Panel(head, border_style=primary),
        Panel(Group(*body), border_style=primary, padding=(1, 1)),
        Text(f"Created: {format_datetime(note.created)} | Updated: {format_datetime(note.updated)}", style="dim"),
        Text(" | ".join(parts), style="dim"),
    )


# -- delete confirmation ---------------------------------------------------


def render_delete(note: Note, theme: dict[str, str]) -> RenderableType:
    danger = theme["danger"]
    return Group(
        Text(f" {note.title} ", style=f"reverse {danger}"),
        Text(""),
        Panel(Text(note.display_content, style=danger), border_style=danger, padding=(1, 1)),
        Text(f"Created: {format_datetime(note.created)} | Updated: {format_datetime(note.updated)}", style=danger),
        Text(DELETE_PROMPT, style=f"bold {danger}"),
    )


def render(state: AppState, theme: dict[str, str], width: int, height: int) -> RenderableType:
    if state.mode is Mode.DELETE_CONFIRM and state.pending_delete is not None:
        return render_delete(state.pending_delete, theme)
    if state.mode is Mode.EDIT:
        if state.viewer is not None:
            return Group(render_viewer(state.viewer, theme), *_status(state, theme))
        if state.session is not None:
            return Group(render_editor(state.session, theme), *_status(state, theme))
    return render_list(state, theme, width, height)
