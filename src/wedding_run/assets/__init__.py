"""Image assets."""

from .loader import AssetBundle, load_assets, load_image

__all__ = ["AssetBundle", "load_assets", "load_image"]
