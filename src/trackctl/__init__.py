"""trackctl — track the time you spend on a project in a CSV file."""

__version__ = "0.1.0"
