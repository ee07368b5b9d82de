"""Text renderers for the CLI: progress line, charts and the tender table."""

from __future__ import annotations

import unicodedata
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from liyao.tenders.models import Tender
from liyao.view.table import TenderTable

_BAR = "█"
_TRACK = "░"


def display_width(text: str) -> int:
    """Terminal column width of *text*; CJK ideographs take two columns."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def pad(text: str, width: int) -> str:
    return text + " " * max(0, width - display_width(text))


def render_progress(elapsed_seconds: int, percent: int, width: int = 30) -> str:
    filled = width * percent // 100
    return f"[{_BAR * filled}{_TRACK * (width - filled)}] {percent}%  {elapsed_seconds}秒"


@dataclass
class NatureShareChart:
    """Share of tenders per procurement nature (財物類 / 工程類 / 勞務類)."""

    records: Sequence[Tender] = field(default_factory=tuple)
    title: str = "採購性質分布"

    def render(self) -> str:
        counts = Counter(r.procurement_nature for r in self.records)
        total = sum(counts.values())
        lines = [self.title]
        if not total:
            lines.append("  (無資料)")
            return "\n".join(lines)
        label_width = max(display_width(label) for label in counts)
        for label, count in counts.most_common():
            share = count * 100 / total
            lines.append(f"  {pad(label, label_width)}  {share:5.1f}%  ({count})")
        return "\n".join(lines)


@dataclass
class ModeCountChart:
    """Number of tenders per tender mode, as horizontal bars."""

    records: Sequence[Tender] = field(default_factory=tuple)
    title: str = "招標方式統計"
    width: int = 30

    def render(self) -> str:
        counts = Counter(r.tender_mode for r in self.records)
        lines = [self.title]
        if not counts:
            lines.append("  (無資料)")
            return "\n".join(lines)
        label_width = max(display_width(label) for label in counts)
        peak = max(counts.values())
        for label, count in counts.most_common():
            bar = _BAR * max(1, self.width * count // peak)
            lines.append(f"  {pad(label, label_width)}  {bar} {count}")
        return "\n".join(lines)


def render_table(table: TenderTable) -> str:
    """Render the current page of *table* with its summary and pagination."""
    headers = table.header_labels()
    rows = table.row_cells()
    widths = [display_width(h) for h in headers]
    for row in rows:
        widths = [max(w, display_width(cell)) for w, cell in zip(widths, row)]

    def _line(cells: list[str]) -> str:
        return " | ".join(pad(cell, w) for cell, w in zip(cells, widths)).rstrip()

    lines = [table.summary_label, _line(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(_line(row) for row in rows)
    lines.append(f"{table.page_number_label}  ({table.page_label})")
    return "\n".join(lines)
