"""Software-rendering core for a palette-based retro game engine."""

__version__ = "0.1.0"
__all__ = ["trig", "palette", "ini", "renderer", "scaling", "rotation", "textmenu", "tilelayers"]