"""
geofacade: one client facade over several geocoding web services.
"""

__version__ = "0.1.0"
