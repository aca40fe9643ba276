"""Chat users and their friendships."""
