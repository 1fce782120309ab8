"""Compare daily COVID-19 deaths per million across countries."""

__version__ = "0.1.0"
