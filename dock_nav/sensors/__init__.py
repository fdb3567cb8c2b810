from .sectors import SectorMinima, min_in_range, sector_min, sector_minima, sample_at

__all__ = [
    "SectorMinima",
    "min_in_range",
    "sector_min",
    "sector_minima",
    "sample_at",
]
