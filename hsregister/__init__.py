"""
HSRegister - Banking Register

A single-user ledger for the command line. Records deposits and
withdrawals against a checking, savings or credit account in a local
SQLite file and prints an account's history.
"""

__version__ = "0.1"
__author__ = "HSRegister Team"
