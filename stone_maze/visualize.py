"""Rendering of maze generations and replayed routes."""

import numpy as np
from PIL import Image
from typing import List, Optional, Sequence

from .automaton import Automaton
from .grid import Grid
from .position import Movement, Position

DEAD_COLOR = (30, 30, 30)
ALIVE_COLOR = (255, 255, 255)
DESTINATION_COLOR = (60, 200, 90)
AGENT_COLOR = (230, 50, 50)
AGENT_HIT_COLOR = (255, 150, 0)  # Agent standing on a live cell


def render_grid_fast(grid: np.ndarray, cell_size: int = 4) -> np.ndarray:
    """Vectorized rendering of a boolean grid as an RGB array."""
    h, w = grid.shape
    img = np.empty((h * cell_size, w * cell_size, 3), dtype=np.uint8)
    img[:] = DEAD_COLOR
    upscaled = np.repeat(np.repeat(grid, cell_size, axis=0), cell_size, axis=1)
    img[upscaled] = ALIVE_COLOR
    return img


def _paint(img: np.ndarray, pos: Position, color, cell_size: int):
    y0, x0 = pos.row * cell_size, pos.col * cell_size
    img[y0:y0 + cell_size, x0:x0 + cell_size] = color


def render_frame(
    grid: Grid,
    agent: Optional[Position] = None,
    destination: Optional[Position] = None,
    cell_size: int = 4,
) -> np.ndarray:
    """Render one generation with the destination and agent highlighted."""
    img = render_grid_fast(grid.array, cell_size)
    if destination is not None:
        _paint(img, destination, DESTINATION_COLOR, cell_size)
    if agent is not None and grid.in_bounds(agent.row, agent.col):
        color = AGENT_HIT_COLOR if grid.get(agent.row, agent.col) else AGENT_COLOR
        _paint(img, agent, color, cell_size)
    return img


def route_frames(automaton: Automaton, path: Sequence[Movement], cell_size: int = 4) -> List[np.ndarray]:
    """One frame per tick of the replayed route, starting at generation 0."""
    frames = []
    position = automaton.source
    current = automaton
    frames.append(render_frame(current.grid, position, automaton.destination, cell_size))
    for movement in path:
        current = current.next_generation()
        position = position.moved(movement)
        frames.append(render_frame(current.grid, position, automaton.destination, cell_size))
    return frames


def save_frame(grid: Grid, filepath: str, agent: Optional[Position] = None,
               destination: Optional[Position] = None, cell_size: int = 4):
    """Save one generation as PNG."""
    Image.fromarray(render_frame(grid, agent, destination, cell_size)).save(filepath)


def save_route_animation(
    automaton: Automaton,
    path: Sequence[Movement],
    filepath: str,
    cell_size: int = 4,
    duration: int = 100,
    loop: int = 0,
):
    """Save the replayed route as an animated GIF."""
    frames = [Image.fromarray(f) for f in route_frames(automaton, path, cell_size)]
    frames[0].save(
        filepath,
        save_all=True,
        append_images=frames[1:],
        duration=duration,
        loop=loop,
    )
