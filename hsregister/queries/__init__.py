"""Ledger query package."""

from hsregister.queries.viewer import AccountViewer, decode_row

__all__ = ["AccountViewer", "decode_row"]
