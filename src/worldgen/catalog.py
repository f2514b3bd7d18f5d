"""Sprite catalog: resolves cell render tags to image files.

Scans an asset directory once and indexes every image by file stem, so the
tag "NplainsSE" resolves to e.g. assets/rivers/NplainsSE.png. Lookups never
fail: unknown tags resolve to None and the presentation layer decides what
to draw instead.
"""

from collections.abc import Iterable
from pathlib import Path

import structlog

from .exceptions import WorldGenError

logger = structlog.get_logger()

IMAGE_SUFFIXES = frozenset({".png", ".gif", ".bmp", ".jpg", ".jpeg"})


class DuplicateSpriteError(WorldGenError):
    """Raised when two image files share the same tag."""

    pass


class SpriteCatalog:
    """Index of sprite files keyed by render tag."""

    def __init__(self, root: Path | str, suffixes: Iterable[str] = IMAGE_SUFFIXES):
        self.root = Path(root)
        self._suffixes = frozenset(s.lower() for s in suffixes)
        self._sprites = self._scan()
        logger.debug("sprites_indexed", root=str(self.root), count=len(self._sprites))

    def _scan(self) -> dict[str, Path]:
        """Map each image stem to its path. Fails on duplicate stems."""
        sprites: dict[str, Path] = {}
        if not self.root.is_dir():
            logger.warning("sprite_directory_missing", root=str(self.root))
            return sprites

        for path in sorted(self.root.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in self._suffixes:
                continue
            if path.stem in sprites:
                raise DuplicateSpriteError(
                    f"Tag {path.stem!r} maps to both {sprites[path.stem]} and {path}"
                )
            sprites[path.stem] = path
        return sprites

    def resolve(self, tag: str | None) -> Path | None:
        """Image path for a render tag, or None if there is none."""
        if tag is None:
            return None
        return self._sprites.get(tag)

    def missing(self, tags: Iterable[str | None]) -> set[str]:
        """Tags (ignoring None) that have no sprite."""
        return {tag for tag in tags if tag is not None and tag not in self._sprites}

    @property
    def tags(self) -> list[str]:
        return sorted(self._sprites)

    def __contains__(self, tag: object) -> bool:
        return tag in self._sprites

    def __len__(self) -> int:
        return len(self._sprites)
