"""Geospatial route and stop layers derived from GTFS feeds."""

__version__ = "0.1.0"
