"""Activity catalog for water-consuming actions."""

from dataclasses import dataclass

QUICK_LOG_COUNT = 4


@dataclass(frozen=True)
class ActivityTemplate:
    """A named activity with its estimated gallon cost per occurrence."""

    id: int
    name: str
    gallons: float


ACTIVITY_CATALOG: tuple[ActivityTemplate, ...] = (
    ActivityTemplate(id=1, name="5 Minute Shower", gallons=15),
    ActivityTemplate(id=2, name="10 Minute Shower", gallons=30),
    ActivityTemplate(id=3, name="Toilet Flush", gallons=3),
    ActivityTemplate(id=4, name="Dishwasher Load", gallons=5),
    ActivityTemplate(id=5, name="Laundry Load", gallons=23),
    ActivityTemplate(id=6, name="Hand Wash Dishes", gallons=4),
    ActivityTemplate(id=7, name="Garden Watering", gallons=12),
    ActivityTemplate(id=8, name="Brush Teeth", gallons=1),
    ActivityTemplate(id=9, name="Shave", gallons=2),
    ActivityTemplate(id=10, name="Take a Bath", gallons=45),
)


def find_activity(
    activity_id: int, catalog: tuple[ActivityTemplate, ...] = ACTIVITY_CATALOG
) -> ActivityTemplate | None:
    """Return the catalog template for an id, if present."""
    for activity in catalog:
        if activity.id == activity_id:
            return activity
    return None
