from __future__ import annotations

"""SVG line chart geometry for a historical series.

Rendered server-side so the charts page needs no client-side JS. The y range
is padded so a flat series still draws inside the plot area.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from currency_tracker.models.history import HistoricalSeries

MARGIN_LEFT = 64
MARGIN_RIGHT = 24
MARGIN_TOP = 16
MARGIN_BOTTOM = 32


@dataclass
class ChartPoint:
    x: float
    y: float
    label: str
    rate: float


@dataclass
class LineChart:
    width: int
    height: int
    points: List[ChartPoint] = field(default_factory=list)
    y_ticks: List[Tuple[float, str]] = field(default_factory=list)
    x_ticks: List[Tuple[float, str]] = field(default_factory=list)

    @property
    def polyline(self) -> str:
        return " ".join(f"{p.x:.1f},{p.y:.1f}" for p in self.points)

    @property
    def plot_left(self) -> int:
        return MARGIN_LEFT

    @property
    def plot_bottom(self) -> int:
        return self.height - MARGIN_BOTTOM


def build_line_chart(
    series: HistoricalSeries, width: int = 720, height: int = 400, y_tick_count: int = 5
) -> LineChart:
    chart = LineChart(width=width, height=height)
    if not series.points:
        return chart

    rates = [p.rate for p in series.points]
    lo, hi = min(rates), max(rates)
    pad = (hi - lo) * 0.1 or max(abs(hi) * 0.01, 0.0001)
    lo, hi = lo - pad, hi + pad

    plot_w = width - MARGIN_LEFT - MARGIN_RIGHT
    plot_h = height - MARGIN_TOP - MARGIN_BOTTOM
    n = len(series.points)

    def x_at(i: int) -> float:
        return MARGIN_LEFT + (plot_w * i / (n - 1) if n > 1 else plot_w / 2)

    def y_at(rate: float) -> float:
        return MARGIN_TOP + plot_h * (hi - rate) / (hi - lo)

    for i, p in enumerate(series.points):
        chart.points.append(
            ChartPoint(x=x_at(i), y=y_at(p.rate), label=p.date.strftime("%b %d"), rate=p.rate)
        )

    for k in range(y_tick_count):
        value = lo + (hi - lo) * k / (y_tick_count - 1)
        chart.y_ticks.append((y_at(value), f"{value:.4f}"))

    # At most ~8 date labels regardless of period length
    step = max(1, (n - 1) // 7) if n > 1 else 1
    for i in range(0, n, step):
        chart.x_ticks.append((x_at(i), chart.points[i].label))
    return chart
