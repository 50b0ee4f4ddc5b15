"""Task management API with password and one-time-passcode login."""
