"""Domain layer - Credential records, userlist format and secret handling."""
