# Vitehelper package

import logging

logger = logging.getLogger(__name__)
formatter = logging.Formatter('%(asctime)s - %(levelname)-6s - %(name)s - %(message)s')
handler = logging.StreamHandler()
handler.setFormatter(formatter)
logger.addHandler(handler)

from .config import ViteConfig  # noqa: E402
from .helper import ViteHelper  # noqa: E402
from .host import AssetHost, InMemoryAssetHost  # noqa: E402
from .models import AssetType, OutputMode, Placement, ViteHelperError  # noqa: E402

__all__ = [
    "AssetHost",
    "AssetType",
    "InMemoryAssetHost",
    "OutputMode",
    "Placement",
    "ViteConfig",
    "ViteHelper",
    "ViteHelperError",
]
