"""Adapters binding the catalog domain to Google Sheets, SQLite and the filesystem."""
