"""Messages posted to chat groups."""
