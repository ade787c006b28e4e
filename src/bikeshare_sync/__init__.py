"""Bike-share station sync: reconcile the official feed with history and OpenStreetMap."""

__version__ = "0.1.0"
