from __future__ import annotations

import math
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.patches import Circle

from .broadcast import BroadcastResult


def plot_broadcast_tree(
    result: BroadcastResult,
    title: str = "",
    save_path: Optional[str] = None,
    show: bool = True,
):
    """
    One-command plot:
      - all nodes
      - transmitting nodes
      - source
      - transmission range circles (radius sqrt(power))
      - broadcast tree edges (source -> covered node, one per stage)

    Circles are auto-limited for readability.
    """
    fig, ax = plt.subplots()

    # Nodes
    xs = [p[0] for p in result.positions]
    ys = [p[1] for p in result.positions]
    ax.scatter(xs, ys, s=10, label="Nodes")

    # Transmitters
    active = [t for t in result.transmitters if t.power > 0]
    if active:
        tx = [t.position[0] for t in active]
        ty = [t.position[1] for t in active]
        ax.scatter(tx, ty, s=45, label=f"Transmitting (|T|={len(active)})")

    # Source
    ax.scatter([result.source[0]], [result.source[1]], s=200, marker="*", edgecolors="black", label="Source")

    EDGE_COLOR = "black"
    EDGE_LW = 1.0
    EDGE_ALPHA = 0.9
    max_circles = 120
    for t in active[:max_circles]:
        c = Circle(t.position, math.sqrt(t.power), fill=False, linewidth=0.8, alpha=0.6)
        ax.add_patch(c)

    if len(active) > max_circles:
        ax.text(
            0.01, 0.01,
            f"Range circles shown: {max_circles}/{len(active)} (auto-limited)",
            transform=ax.transAxes,
            fontsize=9,
            verticalalignment="bottom"
        )

    for (u, v) in result.tree_edges():
        ax.plot(
            [u[0], v[0]],
            [u[1], v[1]],
            color=EDGE_COLOR,
            linewidth=EDGE_LW,
            alpha=EDGE_ALPHA,
            zorder=2,
        )

    ax.set_aspect("equal", adjustable="box")
    ax.grid(True, linewidth=0.3)

    if not title:
        title = f"BIP | nodes={len(result.positions)} | transmitters={len(active)} | cost={result.total_cost:g}"
    ax.set_title(title)

    ax.legend(loc="upper right", fontsize=9)

    if save_path:
        fig.savefig(save_path, dpi=200, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig
