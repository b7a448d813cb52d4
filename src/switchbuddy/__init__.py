"""SwitchBuddy: daily focus ledger, rewards wallet, job board and AI prep flows."""

__version__ = "0.1.0"
