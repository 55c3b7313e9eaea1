"""
Controllers - MVC2 Pattern
All controllers (routes) organized by layer
"""
from app.controllers import chat_controller
from app.controllers import tools_controller
from app.controllers import email_controller

__all__ = [
    "chat_controller",
    "tools_controller",
    "email_controller",
]
