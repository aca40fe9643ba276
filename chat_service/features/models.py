"""Import every ORM model so ``Base.metadata`` knows all tables."""

from chat_service.features.groups.models import Group, group_users
from chat_service.features.messages.models import Message
from chat_service.features.users.models import User, user_friends

__all__ = ["Group", "Message", "User", "group_users", "user_friends"]
