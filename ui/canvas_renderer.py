# File: ui/canvas_renderer.py
# Draws the hash table and the key being animated.
# Layout is computed first as plain geometry in canvas coordinates (origin top-left, y grows
# downward) and then painted onto a matplotlib figure, so the geometry can be checked
# without rendering anything.

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from matplotlib.axes import Axes
from matplotlib.figure import Figure  # Figure objects avoid pyplot's global state
from matplotlib.patches import Rectangle

from utils.data_structures.insertion_animator import AnimationGeometry, AnimationState

Point = Tuple[float, float]
Snapshot = Sequence[Tuple[int, Sequence[str]]]


@dataclass
class Cell:
    x: float
    y: float
    width: float
    height: float
    label: str
    is_bucket: bool = False


@dataclass
class FrameLayout:
    """Geometry of one frame: cells, connector/terminator segments and the floating key."""
    width: float
    height: float
    cells: List[Cell] = field(default_factory=list)
    segments: List[Tuple[Point, Point]] = field(default_factory=list)
    floating_key: Optional[Tuple[float, float, str]] = None


class CanvasRenderer:
    """
    Renders a table snapshot plus the animator's state.

    Args:
        geometry (AnimationGeometry): Cell sizes and padding, shared with the animator.
        dpi (int): Resolution of produced figures; one canvas unit maps to one pixel.
    """

    def __init__(self, geometry: Optional[AnimationGeometry] = None, dpi: int = 100) -> None:
        self.geometry = geometry or AnimationGeometry()
        self.dpi = dpi

    def layout(self, snapshot: Snapshot, state: Optional[AnimationState] = None) -> FrameLayout:
        """
        Compute the frame geometry.

        Args:
            snapshot: Output of ChainedHashTable.enumerate().
            state: Current animation state, or None when idle.

        Returns:
            FrameLayout: Cells, line segments and the floating key position.
        """
        g = self.geometry
        longest = max((len(chain) for _, chain in snapshot), default=0)
        if state is not None:
            longest = max(longest, state.chain_position + 1)

        # Room for the bucket cell, every chain cell and the trailing terminator
        width = g.chain_x(longest + 2)
        height = g.row_y(len(snapshot))
        frame = FrameLayout(width=width, height=height)

        for bucket_index, chain in snapshot:
            y = g.row_y(bucket_index)
            mid_y = y + g.cell_height / 2
            frame.cells.append(Cell(g.chain_x(0), y, g.cell_width, g.cell_height, str(bucket_index), True))

            for slot, key in enumerate(chain, start=1):
                x = g.chain_x(slot)
                frame.cells.append(Cell(x, y, g.cell_width, g.cell_height, key))
                frame.segments.append(((x - g.padding, mid_y), (x, mid_y)))

            if chain:
                frame.segments.extend(self._terminator(g.chain_x(len(chain)) + g.cell_width, y))

        if state is not None:
            frame.floating_key = (state.current_x, state.current_y, state.key)

        return frame

    def _terminator(self, start_x: float, y: float) -> List[Tuple[Point, Point]]:
        # Null pointer: a link out of the last cell ending in a bar with two slashes
        g = self.geometry
        mid_y = y + g.cell_height / 2
        end_x = start_x + g.padding
        top, bottom = y + g.padding, y + g.cell_height - g.padding
        return [
            ((start_x, mid_y), (end_x, mid_y)),
            ((end_x, top), (end_x, bottom)),
            ((end_x, top), (end_x + 10, bottom)),
            ((end_x + 10, top + 10), (end_x, bottom)),
        ]

    def render(self, snapshot: Snapshot, state: Optional[AnimationState] = None, ax: Optional[Axes] = None) -> Figure:
        """
        Paint the frame onto a matplotlib axes.

        Args:
            snapshot: Output of ChainedHashTable.enumerate().
            state: Current animation state, or None when idle.
            ax: Existing axes to draw on. When omitted a new figure is created, sized so
                one canvas unit is one pixel.

        Returns:
            Figure: The figure holding the rendered frame.
        """
        frame = self.layout(snapshot, state)
        g = self.geometry
        top = -g.cell_height  # Keys start above the table

        if ax is None:
            fig = Figure(figsize=(frame.width / self.dpi, (frame.height - top) / self.dpi), dpi=self.dpi)
            ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, frame.width)
        ax.set_ylim(frame.height, top)  # Inverted so y grows downward like a canvas
        ax.set_axis_off()

        for cell in frame.cells:
            ax.add_patch(Rectangle((cell.x, cell.y), cell.width, cell.height,
                                   fill=False, edgecolor="black", linewidth=1))
            ax.text(cell.x + g.padding, cell.y + cell.height / 2, cell.label,
                    va="center", ha="left", fontsize=8,
                    fontweight="bold" if cell.is_bucket else "normal")

        for (x1, y1), (x2, y2) in frame.segments:
            ax.plot([x1, x2], [y1, y2], color="black", linewidth=1)

        if frame.floating_key is not None:
            x, y, key = frame.floating_key
            ax.text(x + g.padding, y + g.cell_height / 2, key,
                    va="center", ha="left", fontsize=8, color="red")

        return ax.figure
