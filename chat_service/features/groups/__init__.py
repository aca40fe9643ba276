"""Chat groups and group membership."""
