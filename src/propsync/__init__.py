"""
Sync HubSpot property definitions and property groups from CSV exports.
"""

__version__ = "0.1.0"
