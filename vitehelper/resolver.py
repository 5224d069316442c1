import logging

from .config import ViteConfig
from .manifest import ManifestReader
from .models import AssetType, ManifestChunk, OutputMode

logger = logging.getLogger(__name__)


class AssetResolver:
    """Maps entry ids to public URLs of the built assets."""

    def __init__(self, config: ViteConfig, manifest_reader: ManifestReader):
        self.config = config
        self.manifest_reader = manifest_reader

    def build_url(self, file_name: str) -> str:
        return f"{self.config.base_url}{self.config.build_dir}/{file_name}"

    def static_url(self, entry_id: str, asset_type: AssetType | str) -> str:
        asset_type = AssetType.coerce(asset_type)
        return self.build_url(f"assets/{entry_id}.{asset_type.extension}")

    def lookup(self, entry_id: str) -> ManifestChunk | None:
        manifest = self.manifest_reader.get_manifest()
        if not manifest:
            return None

        chunk = manifest.get(entry_id)
        if chunk is None:
            logger.debug("Entry %s not in manifest", entry_id)
        return chunk

    def resolve_url(self, entry_id: str, asset_type: AssetType | str = AssetType.SCRIPT) -> str | None:
        asset_type = AssetType.coerce(asset_type)
        if self.config.output_mode is OutputMode.STATIC:
            return self.static_url(entry_id, asset_type)

        chunk = self.lookup(entry_id)
        if chunk is None:
            return None

        if asset_type is AssetType.SCRIPT:
            return self.build_url(chunk.file) if chunk.file else None
        return self.build_url(chunk.css[0]) if chunk.css else None

    def resolve_all_styles(self, entry_id: str) -> list[str]:
        if self.config.output_mode is OutputMode.STATIC:
            return [self.static_url(entry_id, AssetType.STYLE)]

        chunk = self.lookup(entry_id)
        if chunk is None:
            return []
        return [self.build_url(css_file) for css_file in chunk.css]
