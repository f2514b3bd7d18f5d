"""Human-readable cell dumps for click queries and the CLI."""

from .world import CellRecord, World

_FOUR_SEASONS = ("Spring", "Summer", "Fall", "Winter")


def season_names(seasons: int) -> list[str]:
    """Display names for each season index."""
    if seasons == len(_FOUR_SEASONS):
        return list(_FOUR_SEASONS)
    return [f"Season {index}" for index in range(seasons)]


def format_cell(cell: CellRecord) -> str:
    """Format one cell record as "Label: value" lines."""
    names = season_names(len(cell.temperature))

    lines = [
        f"Terrain type: {cell.terrain_type.label}",
        f"Terrain subtype: {cell.subtype.label}",
        f"Terrain picture: {cell.render_tag}",
        f"Has river: {cell.has_river}",
    ]
    if cell.has_river:
        lines.append(f"Rivername: {cell.river_name}")
        lines.append(f"River enters: {cell.river_entrance.name.lower()}")
        lines.append(f"River exits: {cell.river_exit.name.lower()}")

    lines.append(f"Height: {cell.elevation:.3f}")
    lines.extend(f"{name} temp: {value:.2f}" for name, value in zip(names, cell.temperature))
    lines.extend(f"{name} rainfall: {value:.2f}" for name, value in zip(names, cell.rainfall))
    lines.extend(f"{name} wind: {wind}" for name, wind in zip(names, cell.wind))
    return "\n".join(lines)


def describe_cell(world: World, row: int, column: int) -> str:
    """Describe the cell at (row, column).

    Raises:
        CellNotFoundError: If the coordinate is off the grid.
    """
    return format_cell(world.cell(row, column))
