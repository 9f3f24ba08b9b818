from phipacking.model.geometry_primitives import Point
from phipacking.model.size_table import SizeTable
from phipacking.model.state import PackingState

# Radii 1, 2, 4 for exponents 0, 1, 2: easy numbers for tolerance checks
DOUBLING_TABLE = SizeTable(exponents=(0, 1, 2), base_radius=1.0, ratio=2.0)


def make_state(table: SizeTable = DOUBLING_TABLE) -> PackingState:
    return PackingState(size_table=table)


def distance(a, b) -> float:
    return a.position.distance_to(b.position)


def on_x(x: float, y: float = 0.0, z: float = 0.0) -> Point:
    return Point(x, y, z)
