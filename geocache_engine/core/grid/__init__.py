from .cells import GridMapper

__all__ = ["GridMapper"]
