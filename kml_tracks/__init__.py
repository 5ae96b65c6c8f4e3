"""KML Track Viewer core.

Parses KML track-and-waypoint files into typed tracks (LineString) and
icons (Point placemarks) with resolved styling, ready for a map
renderer to draw.
"""

__version__ = "0.1.0"
