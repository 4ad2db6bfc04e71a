"""CPU software rasterizer for triangle meshes, with an OBJ reader and a pygame viewer."""

__version__ = "0.1.0"

__all__ = ["__version__"]