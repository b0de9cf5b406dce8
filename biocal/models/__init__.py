"""Enum registry covering every label type used by the schemas and the calendar pipeline.

Application code can import from here directly::

    from biocal.models import BiodynamicDayType, MoonPhase, SeasonalMode
"""

# ── Calendar ────────────────────────────────────────────────────────────────
from biocal.models.enums import (
    BiodynamicDayType,
    EvidenceLevel,
    MoonPhase,
    PermacultureCategory,
    SeasonalMode,
)

# ── Profile ─────────────────────────────────────────────────────────────────
from biocal.models.enums import (
    ClimateType,
    ExperienceLevel,
    Goal,
    GrowingSpace,
    RainPattern,
    SoilType,
    SummerType,
    SunExposure,
    TimeAvailable,
    WaterAccess,
    WinterType,
)

# ── Journal ─────────────────────────────────────────────────────────────────
from biocal.models.enums import ObservationType

__all__ = [
    # Calendar
    "BiodynamicDayType",
    "EvidenceLevel",
    "MoonPhase",
    "PermacultureCategory",
    "SeasonalMode",
    # Profile
    "ClimateType",
    "ExperienceLevel",
    "Goal",
    "GrowingSpace",
    "RainPattern",
    "SoilType",
    "SummerType",
    "SunExposure",
    "TimeAvailable",
    "WaterAccess",
    "WinterType",
    # Journal
    "ObservationType",
]
