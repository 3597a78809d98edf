"""Fox - A small terminal text editor."""

from .model import TextModel, Position
from .viewport import Viewport
from .overlay import OverlayState, OverlayKind
from .search import find_forward

__all__ = [
    'TextModel',
    'Position',
    'Viewport',
    'OverlayState',
    'OverlayKind',
    'find_forward',
]
