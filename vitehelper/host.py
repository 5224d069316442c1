import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from urllib.parse import urlencode

from jinja2 import Environment

from .models import Placement, ScriptTag, StyleTag

logger = logging.getLogger(__name__)

_env = Environment(autoescape=True)
SCRIPT_TEMPLATE = _env.from_string(
    '<script{% if module %} type="module"{% endif %} src="{{ src }}" id="{{ handle }}-js"></script>'
)
STYLE_TEMPLATE = _env.from_string(
    '<link rel="stylesheet" href="{{ src }}" id="{{ handle }}-css" media="all">'
)


class AssetHost(ABC):
    """Page-side registrar that the helper hands resolved assets to."""

    @abstractmethod
    def register_script(
        self,
        handle: str,
        url: str,
        dependencies: Iterable[str],
        version: str | None,
        placement: Placement,
    ) -> None:
        """Register a script tag for the page."""
        pass

    @abstractmethod
    def register_style(
        self,
        handle: str,
        url: str,
        dependencies: Iterable[str],
        version: str | None,
    ) -> None:
        """Register a stylesheet for the page."""
        pass

    @abstractmethod
    def add_module_rule(self, handle: str) -> None:
        """Emit the script registered under handle as type="module"."""
        pass


def versioned_url(url: str, version: str | None) -> str:
    if not version:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode({'ver': version})}"


def dependency_order(tags: dict[str, ScriptTag] | dict[str, StyleTag]) -> list[str]:
    """Registration order, with every registered dependency emitted before its dependents."""
    ordered: list[str] = []
    visiting: set[str] = set()

    def visit(handle: str):
        if handle in ordered or handle not in tags:
            return
        if handle in visiting:
            logger.warning("Dependency cycle through %s", handle)
            return
        visiting.add(handle)
        for dep in tags[handle].dependencies:
            visit(dep)
        visiting.discard(handle)
        ordered.append(handle)

    for handle in tags:
        visit(handle)
    return ordered


class InMemoryAssetHost(AssetHost):
    """Collects registrations for one page and renders them as HTML tags."""

    def __init__(self):
        self.scripts: dict[str, ScriptTag] = {}
        self.styles: dict[str, StyleTag] = {}
        self.module_handles: set[str] = set()

    def register_script(self, handle, url, dependencies=(), version=None, placement=Placement.FOOTER):
        self.scripts[handle] = ScriptTag(
            handle=handle,
            url=url,
            dependencies=list(dependencies),
            version=version,
            placement=Placement(placement),
        )
        logger.debug("Registered %s", self.scripts[handle])

    def register_style(self, handle, url, dependencies=(), version=None):
        self.styles[handle] = StyleTag(
            handle=handle,
            url=url,
            dependencies=list(dependencies),
            version=version,
        )
        logger.debug("Registered %s", self.styles[handle])

    def add_module_rule(self, handle):
        self.module_handles.add(handle)

    def is_module(self, handle: str) -> bool:
        return handle in self.module_handles

    def render_script(self, tag: ScriptTag) -> str:
        return SCRIPT_TEMPLATE.render(
            src=versioned_url(tag.url, tag.version),
            handle=tag.handle,
            module=self.is_module(tag.handle),
        )

    def render_style(self, tag: StyleTag) -> str:
        return STYLE_TEMPLATE.render(
            src=versioned_url(tag.url, tag.version),
            handle=tag.handle,
        )

    def render_scripts(self, placement: Placement | str = Placement.FOOTER) -> str:
        placement = Placement(placement)
        return "\n".join(
            self.render_script(self.scripts[handle])
            for handle in dependency_order(self.scripts)
            if self.scripts[handle].placement is placement
        )

    def render_styles(self) -> str:
        return "\n".join(
            self.render_style(self.styles[handle])
            for handle in dependency_order(self.styles)
        )
