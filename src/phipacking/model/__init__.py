"""
The MODEL layer contains pure data structures and the placement rules.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the size ladder, the node store, hinges and magnetic snapping.
"""
from phipacking.model.engine import PackingEngine
from phipacking.model.geometry_primitives import Point, Vector
from phipacking.model.size_table import SizeTable, SizeEntry, DEFAULT_SIZE_TABLE
from phipacking.model.state import Node, Link, PackingState, SnapSettings

__all__ = [
    "PackingEngine", "Point", "Vector", "SizeTable", "SizeEntry", "DEFAULT_SIZE_TABLE",
    "Node", "Link", "PackingState", "SnapSettings",
]
