"""Telegram front end for the OMDb movie search API."""

__version__ = "0.1.0"
