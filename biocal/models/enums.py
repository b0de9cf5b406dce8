"""Label enums shared by the calendar pipeline, profile and journal schemas.

Each StrEnum value is the human-readable label that appears in API payloads
and exported documents, so renaming a value is a data-format change.
"""

from enum import StrEnum

# ── Calendar enums ──────────────────────────────────────────────────────────


class MoonPhase(StrEnum):
    """Eight lunar phases in cycle order, starting at the new moon."""

    new = "New"
    waxing_crescent = "Waxing Crescent"
    first_quarter = "First Quarter"
    waxing_gibbous = "Waxing Gibbous"
    full = "Full"
    waning_gibbous = "Waning Gibbous"
    last_quarter = "Last Quarter"
    waning_crescent = "Waning Crescent"


class BiodynamicDayType(StrEnum):
    """Four-day biodynamic rotation (declaration order is the cycle order)."""

    root = "Root"
    flower = "Flower"
    leaf = "Leaf"
    fruit = "Fruit"


class SeasonalMode(StrEnum):
    """Coarse gardening-activity phase derived from month and climate."""

    seed_starting = "Seed Starting"
    transplanting = "Transplanting"
    succession_planting = "Succession Planting"
    heat_management = "Heat Management"
    harvest = "Harvest"
    cover_cropping = "Cover Cropping"
    dormancy = "Dormancy"


class PermacultureCategory(StrEnum):
    water_retention = "Water Retention"
    soil_building = "Soil Building"
    companion_planting = "Companion Planting"
    pest_management = "Pest Management"
    landscape_design = "Landscape Design"
    perennials = "Perennials"


class EvidenceLevel(StrEnum):
    proven = "Proven"
    emerging = "Emerging"
    traditional = "Traditional"


# ── Profile enums ───────────────────────────────────────────────────────────


class ClimateType(StrEnum):
    mediterranean = "Mediterranean"
    humid_subtropical = "Humid Subtropical"
    oceanic = "Oceanic"
    continental = "Continental"
    tropical = "Tropical"
    arid = "Arid"
    semi_arid = "Semi-arid"
    mountain = "Mountain"
    other = "Other"


class SummerType(StrEnum):
    hot_dry = "Hot-Dry"
    hot_humid = "Hot-Humid"
    mild = "Mild"
    short = "Short"


class WinterType(StrEnum):
    mild = "Mild"
    snowy = "Snowy"
    rainy = "Rainy"
    hard_freeze = "Hard Freeze"


class RainPattern(StrEnum):
    year_round = "Year-round"
    wet_winters = "Wet Winters"
    wet_summers = "Wet Summers"
    monsoon = "Monsoon"
    very_dry = "Very Dry"


class GrowingSpace(StrEnum):
    containers = "Containers"
    raised_beds = "Raised Beds"
    in_ground = "In-Ground"
    greenhouse = "Greenhouse"
    balcony = "Balcony"
    food_forest = "Food Forest"


class SunExposure(StrEnum):
    full_sun = "Full Sun"
    partial_sun = "Partial Sun"
    shade = "Shade"
    not_sure = "Not sure"


class SoilType(StrEnum):
    clay = "Clay"
    sandy = "Sandy"
    loam = "Loam"
    rocky = "Rocky"
    unknown = "Unknown"
    not_sure = "Not sure"


class WaterAccess(StrEnum):
    rainwater = "Rainwater"
    irrigation = "Irrigation"
    limited = "Limited"


class TimeAvailable(StrEnum):
    ten_minutes = "10 min/day"
    thirty_minutes = "30 min/day"
    weekends = "Weekends"


class Goal(StrEnum):
    vegetables = "Vegetables"
    herbs = "Herbs"
    flowers = "Flowers"
    fruit_trees = "Fruit Trees"
    landscape_planning = "Landscape Planning"
    all = "All"


class ExperienceLevel(StrEnum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"


# ── Journal enums ───────────────────────────────────────────────────────────


class ObservationType(StrEnum):
    pests_seen = "Pests Seen"
    rainfall = "Rainfall"
    watering = "Watering"
    harvest = "Harvest"
    germination = "Germination"
    temperature = "Temperature"
    other = "Other"
