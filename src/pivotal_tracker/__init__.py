"""Command-line client and library for the Pivotal Tracker API."""

__version__ = "0.1.0"
