import json
import os
from typing import Any
from unittest.mock import Mock

import pytest

from vitehelper.config import ViteConfig
from vitehelper.host import InMemoryAssetHost
from vitehelper.models import OutputMode

FIXTURES_URL = "https://example.com/wp-content/plugins/my-plugin/"
BUILD_MTIME = 1700000000


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    """Manifest as emitted by `vite build --manifest`."""
    return {
        "src/admin.js": {
            "file": "assets/admin-abc123.js",
            "src": "src/admin.js",
            "isEntry": True,
            "css": ["assets/admin-def456.css"],
        },
        "src/front.js": {
            "file": "assets/front-789abc.js",
            "src": "src/front.js",
            "isEntry": True,
            "imports": ["_vendor-111.js"],
            "css": ["assets/front-a.css", "assets/front-b.css"],
        },
        "src/styles-only.css": {
            "css": ["assets/styles-only-222.css"],
        },
        "_vendor-111.js": {
            "file": "assets/vendor-111.js",
        },
    }


@pytest.fixture
def fixtures_path(tmp_path, manifest_data: dict[str, Any]) -> str:
    """Plugin root holding manifest.json directly (empty build dir)."""
    (tmp_path / "manifest.json").write_text(json.dumps(manifest_data))
    return str(tmp_path) + "/"


@pytest.fixture
def manifest_config(fixtures_path: str) -> ViteConfig:
    return ViteConfig(
        slug="my-plugin",
        base_url=FIXTURES_URL,
        base_path=fixtures_path,
        build_dir="",
        output_mode=OutputMode.MANIFEST,
    )


@pytest.fixture
def static_config(tmp_path) -> ViteConfig:
    return ViteConfig(
        slug="my-plugin",
        base_url=FIXTURES_URL,
        base_path=str(tmp_path),
        build_dir="build",
        output_mode=OutputMode.STATIC,
    )


@pytest.fixture
def static_build_dir(tmp_path) -> str:
    """Create the static build directory with a known mtime."""
    build_dir = tmp_path / "build"
    build_dir.mkdir()
    os.utime(build_dir, (BUILD_MTIME, BUILD_MTIME))
    return str(build_dir)


@pytest.fixture
def host() -> InMemoryAssetHost:
    return InMemoryAssetHost()


def make_session(status_code: int = 200, side_effect: Exception | None = None) -> Mock:
    session = Mock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = Mock(status_code=status_code)
    return session


@pytest.fixture
def live_session() -> Mock:
    """HTTP session whose dev server answers 200."""
    return make_session(200)


@pytest.fixture
def dead_session() -> Mock:
    """HTTP session whose dev server answers 404."""
    return make_session(404)


@pytest.fixture
def session_factory():
    """Build HTTP sessions with a given dev server status or transport error."""
    return make_session
