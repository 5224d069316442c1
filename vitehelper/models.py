from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ViteHelperError(Exception):
    pass


class ConfigError(ViteHelperError):
    pass


class ManifestError(ViteHelperError):
    pass


class OutputMode(str, Enum):
    MANIFEST = "manifest"
    STATIC = "static"


class AssetType(str, Enum):
    SCRIPT = "script"
    STYLE = "style"

    @property
    def extension(self) -> str:
        return "js" if self is AssetType.SCRIPT else "css"

    @classmethod
    def coerce(cls, value: "AssetType | str") -> "AssetType":
        """Accept the enum, its value, or a file extension ("js"/"css")."""
        if isinstance(value, cls):
            return value
        aliases = {"js": cls.SCRIPT, "css": cls.STYLE}
        if value in aliases:
            return aliases[value]
        return cls(value)


class Placement(str, Enum):
    HEAD = "head"
    FOOTER = "footer"


class ManifestChunk(BaseModel):
    """One record of a Vite manifest.json, keyed by entry id in the manifest."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    file: str | None = None
    css: list[str] = Field(default_factory=list)
    src: str | None = None
    name: str | None = None
    is_entry: bool = Field(default=False, alias="isEntry")
    is_dynamic_entry: bool = Field(default=False, alias="isDynamicEntry")
    imports: list[str] = Field(default_factory=list)
    dynamic_imports: list[str] = Field(default_factory=list, alias="dynamicImports")
    assets: list[str] = Field(default_factory=list)

    @field_validator("css", "imports", "dynamic_imports", "assets", mode="before")
    @classmethod
    def validate_string_list(cls, v: Any) -> list[str]:
        if v is None:
            return []
        return v


Manifest = dict[str, ManifestChunk]


class RegisteredEntry(BaseModel):
    entry_id: str
    dependencies: list[str] = Field(default_factory=list)
    placement: Placement = Placement.FOOTER


class ScriptTag(BaseModel):
    handle: str
    url: str
    dependencies: list[str] = Field(default_factory=list)
    version: str | None = None
    placement: Placement = Placement.FOOTER

    def __str__(self) -> str:
        version_str = f" ver={self.version}" if self.version else ""
        return f"script {self.handle} -> {self.url}{version_str} ({self.placement.value})"


class StyleTag(BaseModel):
    handle: str
    url: str
    dependencies: list[str] = Field(default_factory=list)
    version: str | None = None

    def __str__(self) -> str:
        version_str = f" ver={self.version}" if self.version else ""
        return f"style {self.handle} -> {self.url}{version_str}"
