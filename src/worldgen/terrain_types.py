"""Terrain types and subtypes (biomes) and their groupings."""

from enum import IntEnum


class TerrainType(IntEnum):
    """Coarse terrain class assigned by height classification."""

    EMPTY = 0
    OCEAN = 1
    WATER = 2
    PLAINS = 3
    HILL = 4
    MOUNTAIN = 5
    LIGHT = 6
    DARKNESS = 7

    @property
    def label(self) -> str:
        return self.name.lower()


class TerrainSubtype(IntEnum):
    """Fine-grained land cover. Values are stored as uint8 in grid layers."""

    EMPTY = 0
    SEA = 1
    LAKE = 2
    PLAINS = 3
    FOREST = 4
    DESERT = 5
    TUNDRA = 6
    VERDANTFOREST = 7
    SNOWFOREST = 8
    SNOWDESERT = 9
    ICE = 10
    HILL = 11
    DRYHILL = 12
    SNOWHILL = 13
    MOUNTAIN = 14
    EARTHMOUNTAIN = 15
    SNOWMOUNTAIN = 16
    LIGHT = 17
    AIRPLAINS = 18
    BRIGHTLIGHT = 19
    GLOWFOREST = 20
    GLOWPLAINS = 21
    WATERPLAINS = 22
    DARKNESS = 23
    DEEPDARKNESS = 24
    FIREHILL = 25
    FIREPLAINS = 26
    TOXIC = 27
    WASTELAND = 28

    @property
    def label(self) -> str:
        """Lowercase name, also the base of render tags."""
        return self.name.lower()

    @property
    def is_open_water(self) -> bool:
        """Sea or lake."""
        return self in _OPEN_WATER

    @property
    def stops_rivers(self) -> bool:
        """Rivers end when they reach sea, lake or ice."""
        return self in _RIVER_SINKS

    @property
    def is_mountain(self) -> bool:
        """Whether rivers may spring from this subtype."""
        return self in _MOUNTAINS


# Define sets for O(1) lookup
_OPEN_WATER = frozenset({TerrainSubtype.SEA, TerrainSubtype.LAKE})

_RIVER_SINKS = frozenset({
    TerrainSubtype.SEA,
    TerrainSubtype.LAKE,
    TerrainSubtype.ICE,
})

_MOUNTAINS = frozenset({
    TerrainSubtype.MOUNTAIN,
    TerrainSubtype.SNOWMOUNTAIN,
    TerrainSubtype.EARTHMOUNTAIN,
})

# Terrain types the height classifier can produce.
GENERATED_TERRAIN_TYPES = frozenset({
    TerrainType.OCEAN,
    TerrainType.WATER,
    TerrainType.PLAINS,
    TerrainType.HILL,
    TerrainType.MOUNTAIN,
})
