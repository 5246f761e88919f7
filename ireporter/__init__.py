"""
iReporter - red-flag and intervention reports.

Client-side lifecycle and synchronization engine plus a small local
Report Service for development.
"""

__version__ = "0.1.0"
