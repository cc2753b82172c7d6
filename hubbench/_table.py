from __future__ import annotations

import os
from pathlib import Path

from ._config import BenchConfig
from ._runner import Table

FIRST_COLUMN_WIDTH: int = 15
SIZE_HEADER = "container size"
CELL_WIDTH: int = 4


def render_table(table: Table, config: BenchConfig) -> str:
    """Lay out ``table`` as bordered monospace text, one block per result."""
    exponents = config.size_exponents()
    data_width = max(
        len(exponents) * (CELL_WIDTH + 1),
        len(SIZE_HEADER),
        *(len(res.title) for res in table),
    )
    table_width = FIRST_COLUMN_WIDTH + 2 + len(table) * (data_width + 2) + 1
    lead = "  " + " " * FIRST_COLUMN_WIDTH

    data_rule = " " * (FIRST_COLUMN_WIDTH + 2) + "-" * (table_width - FIRST_COLUMN_WIDTH - 2)
    table_rule = "-" * table_width
    rates = table[0].erasure_rates if table else config.erasure_rates()

    lines = [data_rule]
    banner = f"| sizeof(element): {config.element_size}"
    lines.append(lead + banner.ljust(table_width - FIRST_COLUMN_WIDTH - 3) + "|")
    lines.append(data_rule)
    lines.append(lead + "".join(f"| {res.title:<{data_width}}" for res in table) + "|")
    lines.append(data_rule)
    lines.append(lead + f"| {SIZE_HEADER:<{data_width}}" * len(table) + "|")
    lines.append(table_rule)

    size_header = "".join(f"1.E{i} " for i in exponents)
    lines.append(
        f"| {'erase rate':<{FIRST_COLUMN_WIDTH}}"
        + f"| {size_header:<{data_width}}" * len(table)
        + "|"
    )
    lines.append(table_rule)

    for row, rate in enumerate(rates):
        cells = []
        for res in table:
            block = "".join(f"{x:<{CELL_WIDTH}} " for x in res.data[row])
            cells.append(f"| {block:<{data_width}}")
        lines.append(f"| {rate:<{FIRST_COLUMN_WIDTH}g}" + "".join(cells) + "|")

    lines.append(table_rule)
    return "\n".join(lines) + "\n"


def write_table(table: Table, path: str | os.PathLike[str], config: BenchConfig) -> Path:
    out_path = Path(path)
    out_path.write_text(render_table(table, config), encoding="utf-8")
    return out_path
