# -*- coding: utf-8 -*-
from __future__ import annotations
import re
from dataclasses import dataclass, field

_LINE_SPLIT = re.compile(r"\r?\n")

@dataclass
class ParsedTable:
    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

def parse_table(text: str | None, delimiter: str = ",") -> ParsedTable:
    """Split delimited text into a header list and one name->string dict per row.

    - Leading/trailing blank space of the whole text is ignored.
    - Fewer than two lines (no data row) gives an empty table, not an error.
    - Short rows are padded with "" ; every value is stripped.
    """
    lines = _LINE_SPLIT.split((text or "").strip())
    if len(lines) < 2:
        return ParsedTable()
    headers = [h.strip() for h in lines[0].split(delimiter)]
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        cols = line.split(delimiter)
        rows.append({h: (cols[i].strip() if i < len(cols) else "") for i, h in enumerate(headers)})
    return ParsedTable(headers=headers, rows=rows)
