"""Conversation store: repository protocols and the SQLite implementation."""
