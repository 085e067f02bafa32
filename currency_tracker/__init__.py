"""Currency Tracker: exchange rate dashboard, converter and historical charts."""

__version__ = "0.1.0"
