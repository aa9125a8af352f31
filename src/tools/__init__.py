from .checklist_tools import register_checklist_tools

__all__ = [
    "register_checklist_tools",
]
