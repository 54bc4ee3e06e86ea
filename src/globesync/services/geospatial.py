"""Geospatial helper functions."""

from __future__ import annotations

from typing import Sequence

from shapely.geometry import LineString


def route_bounds(geometry: Sequence[tuple[float, float]]) -> tuple[float, float, float, float]:
    """Return (min_lon, min_lat, max_lon, max_lat) for a (lon, lat) route geometry."""

    if len(geometry) < 2:
        raise ValueError("At least two points are required to bound a route.")
    return LineString(geometry).bounds


def map_center(geometry: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Center of the route's bounding box as (lat, lon), the order map widgets expect."""

    min_lon, min_lat, max_lon, max_lat = route_bounds(geometry)
    return ((min_lat + max_lat) / 2.0, (min_lon + max_lon) / 2.0)
