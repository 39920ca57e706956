"""SVG rendering of a computed layout."""

from __future__ import annotations

from xml.sax.saxutils import escape

from .formatting import format_number
from .layout import LayoutResult

STYLE = """\
    .edge { fill: none; stroke: #8a94a6; stroke-width: 1.5; marker-end: url(#arrow); }
    .edge.critical { stroke: #d64545; stroke-width: 2.5; marker-end: url(#arrow-critical); }
    .node circle { fill: #ffffff; stroke: #2f3b52; stroke-width: 2; }
    .node text.name { font: bold 14px sans-serif; text-anchor: middle; dominant-baseline: central; }
    text.small { font: 11px sans-serif; fill: #4a5568; text-anchor: middle; }
    text.edge-label { font: 12px sans-serif; text-anchor: middle; }
    text.edge-times { font: 10px sans-serif; fill: #4a5568; text-anchor: middle; }"""


class SvgRenderer:
    """Render a ``LayoutResult`` as a standalone SVG document.

    Critical edges get the ``critical`` class; node circles are drawn last so
    they sit on top of the curves.
    """

    def __init__(self, layout: LayoutResult, *, label_line_height: float = 14):
        self.layout = layout
        self.label_line_height = label_line_height

    def render(self) -> str:
        """Return the SVG document text."""
        layout = self.layout
        lines = [
            '<svg xmlns="http://www.w3.org/2000/svg" '
            f'viewBox="0 0 {layout.width:g} {layout.height:g}" '
            f'width="{layout.width:g}" height="{layout.height:g}">'
        ]
        lines.append("  <defs>")
        lines.append(self._marker("arrow", "#8a94a6"))
        lines.append(self._marker("arrow-critical", "#d64545"))
        lines.append("  </defs>")
        lines.append("  <style>")
        lines.append(STYLE)
        lines.append("  </style>")

        for geometry in layout.edge_geometry:
            css_class = "edge critical" if geometry.critical else "edge"
            lines.append(f'  <path d="{geometry.path}" class="{css_class}"/>')

            anchor = geometry.label_anchor
            lines.append(
                f'  <text x="{anchor.x:g}" y="{anchor.y:g}" class="edge-label">'
                f"{format_number(geometry.weight)}</text>"
            )
            if geometry.schedule is not None:
                s = geometry.schedule
                times = (
                    f"ES {format_number(s.es)} | EF {format_number(s.ef)} | "
                    f"LS {format_number(s.ls)} | LF {format_number(s.lf)}"
                )
                lines.append(
                    f'  <text x="{anchor.x:g}" y="{anchor.y + self.label_line_height:g}" '
                    f'class="edge-times">{times}</text>'
                )

        for name, point in layout.position.items():
            lines.append('  <g class="node">')
            lines.append(f'    <circle cx="{point.x:g}" cy="{point.y:g}" r="{layout.radius:g}"/>')
            lines.append(
                f'    <text x="{point.x:g}" y="{point.y:g}" class="name">{escape(name)}</text>'
            )
            note = layout.annotations.get(name)
            if note is not None:
                lines.append(
                    f'    <text x="{note.earliest_anchor.x:g}" y="{note.earliest_anchor.y:g}" '
                    f'class="small">E {format_number(note.earliest)}</text>'
                )
                lines.append(
                    f'    <text x="{note.latest_anchor.x:g}" y="{note.latest_anchor.y:g}" '
                    f'class="small">L {format_number(note.latest)}</text>'
                )
            lines.append("  </g>")

        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _marker(marker_id: str, color: str) -> str:
        return (
            f'    <marker id="{marker_id}" viewBox="0 0 10 10" refX="10" refY="5" '
            'markerWidth="8" markerHeight="8" orient="auto-start-reverse">'
            f'<path d="M 0 0 L 10 5 L 0 10 z" fill="{color}"/></marker>'
        )
