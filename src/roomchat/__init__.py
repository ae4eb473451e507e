"""roomchat: group messaging with per-member unread tracking."""

__version__ = "0.1.0"
