import logging
import os
import zlib
from collections.abc import Iterable

import requests

from .config import ViteConfig
from .host import AssetHost
from .manifest import ManifestReader
from .models import (
    AssetType,
    Manifest,
    OutputMode,
    Placement,
    RegisteredEntry,
)
from .probe import DevServerProber
from .registry import EntryRegistry
from .resolver import AssetResolver

logger = logging.getLogger(__name__)


def crc32_version(file_name: str) -> str:
    return format(zlib.crc32(file_name.encode("utf-8")) & 0xFFFFFFFF, "08x")


class ViteHelper:
    """Enqueues Vite entries from the dev server when it is up, else from the build.

    One helper serves one request: the dev server probe and the manifest are
    each read at most once and kept for the helper's lifetime.
    """

    def __init__(
        self,
        config: ViteConfig,
        host: AssetHost,
        session: requests.Session | None = None,
    ):
        self.config = config
        self.host = host
        self.prober = DevServerProber(
            config.dev_server_url, config.probe_timeout, session=session
        )
        self.manifest_reader = ManifestReader(
            config.manifest_path,
            enabled=config.output_mode is OutputMode.MANIFEST,
        )
        self.resolver = AssetResolver(config, self.manifest_reader)
        self.registry = EntryRegistry()

    def is_dev_server_live(self) -> bool:
        return self.prober.is_dev_server_live()

    def get_manifest(self) -> Manifest | None:
        return self.manifest_reader.get_manifest()

    def resolve_url(self, entry_id: str, asset_type: AssetType | str = AssetType.SCRIPT) -> str | None:
        return self.resolver.resolve_url(entry_id, asset_type)

    def resolve_all_styles(self, entry_id: str) -> list[str]:
        return self.resolver.resolve_all_styles(entry_id)

    def register(
        self,
        handle: str,
        entry_id: str,
        dependencies: Iterable[str] = (),
        placement: Placement | str = Placement.FOOTER,
    ) -> "ViteHelper":
        self.registry.register(handle, entry_id, dependencies, placement)
        return self

    def get(self, handle: str) -> RegisteredEntry | None:
        return self.registry.get(handle)

    def activate(self, handle: str) -> bool:
        entry = self.registry.get(handle)
        if entry is None:
            logger.debug("No entry registered for handle %s", handle)
            return False
        return self.enqueue(entry.entry_id, handle, entry.dependencies, entry.placement)

    def enqueue(
        self,
        entry_id: str,
        handle: str,
        dependencies: Iterable[str] = (),
        placement: Placement | str = Placement.FOOTER,
    ) -> bool:
        dependencies = list(dependencies)
        placement = Placement(placement)
        if self.is_dev_server_live():
            return self.enqueue_dev(entry_id, handle, dependencies, placement)
        if self.config.output_mode is OutputMode.MANIFEST:
            return self.enqueue_prod_manifest(entry_id, handle, dependencies, placement)
        return self.enqueue_prod_static(entry_id, handle, dependencies, placement)

    def dev_url(self, entry_id: str) -> str:
        return f"{self.config.dev_server_url}/{entry_id.lstrip('/')}"

    def enqueue_dev(
        self, entry_id: str, handle: str, dependencies: list[str], placement: Placement
    ) -> bool:
        client_handle = self.config.vite_client_handle

        # No versions: the dev server always serves the latest module
        self.host.register_script(
            client_handle, self.config.vite_client_url, [], None, Placement.FOOTER
        )
        self.host.add_module_rule(client_handle)

        script_url = self.dev_url(entry_id)
        self.host.register_script(
            handle, script_url, [*dependencies, client_handle], None, placement
        )
        self.host.add_module_rule(handle)

        logger.debug("Enqueued %s from dev server: %s", handle, script_url)
        return True

    def enqueue_prod_manifest(
        self, entry_id: str, handle: str, dependencies: list[str], placement: Placement
    ) -> bool:
        chunk = self.resolver.lookup(entry_id)
        if chunk is None:
            logger.debug("Cannot enqueue %s: %s missing from manifest", handle, entry_id)
            return False

        version = crc32_version(chunk.file) if chunk.file else None

        if chunk.file:
            self.host.register_script(
                handle, self.resolver.build_url(chunk.file), dependencies, version, placement
            )

        for index, css_url in enumerate(self.resolver.resolve_all_styles(entry_id), start=1):
            self.host.register_style(f"{handle}-css-{index}", css_url, [], version)

        logger.debug("Enqueued %s from manifest (version %s)", handle, version)
        return True

    def enqueue_prod_static(
        self, entry_id: str, handle: str, dependencies: list[str], placement: Placement
    ) -> bool:
        build_path = self.config.build_path
        version = str(int(os.path.getmtime(build_path))) if os.path.exists(build_path) else None

        self.host.register_script(
            handle,
            self.resolver.static_url(entry_id, AssetType.SCRIPT),
            dependencies,
            version,
            placement,
        )

        css_url = self.resolver.resolve_url(entry_id, AssetType.STYLE)
        if css_url:
            self.host.register_style(f"{handle}-css", css_url, [], version)

        logger.debug("Enqueued %s from static build (version %s)", handle, version)
        return True
