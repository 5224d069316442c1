import pytest
from pydantic import ValidationError

from vitehelper.models import (
    AssetType,
    ManifestChunk,
    Placement,
    RegisteredEntry,
    ScriptTag,
)


class TestAssetType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("script", AssetType.SCRIPT),
            ("js", AssetType.SCRIPT),
            ("style", AssetType.STYLE),
            ("css", AssetType.STYLE),
            (AssetType.STYLE, AssetType.STYLE),
        ],
    )
    def test_coerce(self, value, expected):
        assert AssetType.coerce(value) is expected

    def test_coerce_unknown(self):
        with pytest.raises(ValueError):
            AssetType.coerce("image")

    def test_extension(self):
        assert AssetType.SCRIPT.extension == "js"
        assert AssetType.STYLE.extension == "css"


class TestManifestChunk:
    def test_vite_keys(self):
        chunk = ManifestChunk.model_validate(
            {
                "file": "assets/main-abc.js",
                "src": "src/main.js",
                "isEntry": True,
                "dynamicImports": ["src/lazy.js"],
                "css": ["assets/main-def.css"],
                "unknownKey": 1,
            }
        )

        assert chunk.file == "assets/main-abc.js"
        assert chunk.is_entry is True
        assert chunk.dynamic_imports == ["src/lazy.js"]
        assert chunk.css == ["assets/main-def.css"]

    def test_defaults(self):
        chunk = ManifestChunk.model_validate({})

        assert chunk.file is None
        assert chunk.css == []
        assert chunk.is_entry is False

    def test_null_css_is_empty(self):
        assert ManifestChunk.model_validate({"css": None}).css == []

    def test_invalid_css(self):
        with pytest.raises(ValidationError):
            ManifestChunk.model_validate({"css": "assets/main.css"})


def test_registered_entry_defaults():
    entry = RegisteredEntry(entry_id="src/admin.js")

    assert entry.dependencies == []
    assert entry.placement is Placement.FOOTER


def test_script_tag_str():
    tag = ScriptTag(handle="admin", url="https://example.com/admin.js", version="1")

    assert str(tag) == "script admin -> https://example.com/admin.js ver=1 (footer)"
