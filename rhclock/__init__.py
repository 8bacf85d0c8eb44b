"""Command-line time clock for the MeuRH timesheet service: service client, local store and formatting helpers."""

__version__ = "1.0.1"