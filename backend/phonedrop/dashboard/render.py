"""Dashboard renderer — groups the snapshot by category for display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from phonedrop.dashboard.classifier import READABLE, Category, classify
from phonedrop.schemas.files import FileRecord
from phonedrop.utils.formatting import display_name, format_size, format_time

if TYPE_CHECKING:
    from phonedrop.dashboard.state import DashboardState

PENDING = "Loading..."
UNAVAILABLE = "(content unavailable)"

SECTION_TITLES: dict[Category, str] = {
    Category.IMAGE: "Images",
    Category.TEXT: "Text",
    Category.CODE: "Code",
    Category.FILE: "Files",
}


@dataclass(frozen=True)
class FileCard:
    record: FileRecord
    category: Category
    name: str
    meta: str
    body: str | None = None
    pending: bool = False


@dataclass(frozen=True)
class Section:
    category: Category
    title: str
    cards: tuple[FileCard, ...]


@dataclass(frozen=True)
class DashboardView:
    loading: bool
    auto_refresh: bool
    sections: tuple[Section, ...]

    @property
    def total(self) -> int:
        return sum(len(s.cards) for s in self.sections)

    @property
    def empty(self) -> bool:
        return not self.sections


def _card(record: FileRecord, state: DashboardState, gave_up: Callable[[str], bool]) -> FileCard:
    category = classify(record.display_name)
    meta = format_time(record.uploaded_at)
    if category not in READABLE:
        meta = f"{meta} · {format_size(record.size_bytes)}"

    body = None
    pending = False
    if category in READABLE:
        body = state.content_for(record.address)
        if body is None:
            if gave_up(record.address):
                body = UNAVAILABLE
            else:
                body = PENDING
                pending = True

    return FileCard(
        record=record,
        category=category,
        name=display_name(record.display_name),
        meta=meta,
        body=body,
        pending=pending,
    )


def build_view(
    state: DashboardState,
    gave_up: Callable[[str], bool] | None = None,
) -> DashboardView:
    """Snapshot -> sections in display order, empty sections dropped."""
    gave_up = gave_up or (lambda _address: False)
    grouped: dict[Category, list[FileCard]] = {c: [] for c in SECTION_TITLES}
    for record in state.snapshot:
        card = _card(record, state, gave_up)
        grouped[card.category].append(card)

    sections = tuple(
        Section(category=c, title=SECTION_TITLES[c], cards=tuple(cards))
        for c, cards in grouped.items()
        if cards
    )
    return DashboardView(loading=state.loading, auto_refresh=state.auto_refresh, sections=sections)


def render_text(view: DashboardView) -> str:
    """Plain-text dashboard for the terminal."""
    if view.loading:
        return PENDING

    header = f"Phone Dashboard — auto-refresh {'on' if view.auto_refresh else 'off'}"
    lines = [header, "=" * len(header)]
    if view.empty:
        lines += ["", "No files yet", "Send something from your phone!"]
        return "\n".join(lines)

    for section in view.sections:
        lines += ["", f"{section.title} ({len(section.cards)})"]
        for card in section.cards:
            lines.append(f"  {card.name}  [{card.meta}]")
            if card.category not in READABLE:
                lines.append(f"    {card.record.address}")
            if card.body is not None:
                lines.extend(f"    | {line}" for line in card.body.splitlines() or [""])
    return "\n".join(lines)
