"""A small terminal bank: accounts file, user sessions, account creation and a transaction monitor."""

__version__ = "0.1.0"