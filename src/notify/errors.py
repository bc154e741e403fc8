class NotificationError(Exception):
    """Raised when a transition notification cannot be delivered."""
