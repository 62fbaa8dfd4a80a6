from . import auth, chat, credits, feedback, health, meetings, users, websocket

__all__ = ["auth", "chat", "credits", "feedback", "health", "meetings", "users", "websocket"]
