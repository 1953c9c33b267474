"""
Schematic: spatial index over engine schematic grids.

Tokenizes a text grid of digits, periods and symbols into column-ranged
tokens and answers 8-neighbour adjacency queries (part numbers, gear ratios).
"""

__version__ = "0.1.0"
