"""
Renderer Module - pygame views for the raycast engine
"""

from .renderer import Renderer3D
from .textures import TextureManager
from .topdown import TopDownView

__all__ = ['Renderer3D', 'TextureManager', 'TopDownView']
