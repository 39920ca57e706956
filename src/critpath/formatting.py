"""Plain-text presentation of CPM results."""

from __future__ import annotations

import re

from .cpm import CPMResult

EDGE_HEADERS = ["#", "From", "To", "Weight", "ES", "EF", "LS", "LF", "Slack", "Critical"]
NODE_HEADERS = ["Node", "E", "L"]


def format_number(value: float) -> str:
    """Format a time value with three decimals, trimming trailing zeros.

    3 -> "3.0", 2.5 -> "2.50", 1.25 -> "1.250".
    """
    text = f"{value:.3f}"
    if text.endswith(".000"):
        return text[:-4] + ".0"
    return re.sub(r"\.(\d)00$", r".\g<1>0", text)


def format_summary(result: CPMResult) -> str:
    """One-line summary: critical paths and project duration."""
    paths = "; ".join(" → ".join(path) for path in result.critical_paths)
    return f"Critical path(s): {paths or '—'}. Project duration: {format_number(result.duration)}"


def format_edge_table(result: CPMResult) -> str:
    """Activity table with schedule metrics, one row per edge."""
    rows = [
        [
            str(i),
            edge.from_node,
            edge.to_node,
            format_number(edge.weight),
            format_number(edge.es),
            format_number(edge.ef),
            format_number(edge.ls),
            format_number(edge.lf),
            format_number(edge.slack),
            "yes" if edge.critical else "",
        ]
        for i, edge in enumerate(result.edges, start=1)
    ]
    return _render_table(EDGE_HEADERS, rows)


def format_node_table(result: CPMResult) -> str:
    """Event table with earliest and latest times."""
    rows = [
        [name, format_number(earliest), format_number(latest)]
        for name, earliest, latest in zip(
            result.node_order, result.earliest, result.latest, strict=True
        )
    ]
    return _render_table(NODE_HEADERS, rows)


def format_report(result: CPMResult) -> str:
    """Edge table, node table and summary separated by blank lines."""
    return "\n\n".join(
        [format_edge_table(result), format_node_table(result), format_summary(result)]
    )


def _render_table(headers: list[str], rows: list[list[str]]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: list[str]) -> str:
        padded = (cell.ljust(width) for cell, width in zip(cells, widths, strict=True))
        return "  ".join(padded).rstrip()

    lines = [line(headers), line(["-" * width for width in widths])]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)
