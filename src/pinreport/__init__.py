"""PinReport: daily financial report engine for the Pin business suite."""

__version__ = "0.1.0"
