"""Breaking news watch for a monitored set of locations."""

__version__ = "0.1.0"
