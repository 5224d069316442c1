import json
import logging
import os

from pydantic import ValidationError

from .models import Manifest, ManifestChunk, ManifestError

logger = logging.getLogger(__name__)


def parse_manifest(raw_data: str | bytes) -> Manifest:
    """Parse raw manifest.json content into ManifestChunk records."""
    try:
        data = json.loads(raw_data)
    except (ValueError, UnicodeDecodeError) as e:
        raise ManifestError(f"Manifest is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(
            f"Manifest must be a JSON object, got {type(data).__name__}"
        )

    manifest: Manifest = {}
    for entry_id, chunk in data.items():
        try:
            manifest[entry_id] = ManifestChunk.model_validate(chunk)
        except ValidationError as e:
            # One odd chunk must not hide every other asset
            logger.warning("Skipping invalid manifest entry %s: %s", entry_id, e)
    return manifest


class ManifestReader:
    def __init__(self, path: str, enabled: bool = True):
        self.path = path
        self.enabled = enabled
        self._manifest: Manifest | None = None

    def load(self) -> Manifest | None:
        """Read and parse the manifest, raising ManifestError on bad content.

        Returns None when the file is missing or cannot be read. A successful
        load is cached and the file is never read again.
        """
        if self._manifest is not None:
            return self._manifest

        if not os.access(self.path, os.R_OK):
            logger.debug("Manifest %s not readable", self.path)
            return None

        try:
            with open(self.path, "rb") as f:
                content = f.read()
        except OSError as e:
            logger.warning("Failed to read manifest %s: %s", self.path, e)
            return None

        self._manifest = parse_manifest(content)
        logger.debug("Loaded manifest %s (%d entries)", self.path, len(self._manifest))
        return self._manifest

    def get_manifest(self) -> Manifest | None:
        if not self.enabled:
            return None

        try:
            return self.load()
        except ManifestError as e:
            # Not cached: a rebuilt manifest is picked up on the next call
            logger.warning("Ignoring manifest %s: %s", self.path, e)
            return None
