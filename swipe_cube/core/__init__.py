from swipe_cube.core.cubelet_grid import Cubelet, CubeletGrid
from swipe_cube.core.moves import Move

__all__ = ["Cubelet", "CubeletGrid", "Move"]
