"""
Hotel booking backend: room availability, stay pricing and booking references.
"""

__version__ = "1.0.0"
