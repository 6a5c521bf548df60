"""Built-in exercise catalog merged with a user's own additions."""

from typing import Iterable, Mapping

BASE_EXERCISES: dict[str, list[str]] = {
    "chest": ["Bench Press", "Pec Fly", "Chest Press"],
    "back": ["Deadlift", "Lat Pulldown", "Pulley Row"],
    "legs": ["Squat", "Smith Machine Squat", "Leg Press"],
    "shoulders": ["Side Raise", "Shoulder Press", "Front Raise"],
    "arms": ["Finger Roll", "Barbell Curl", "Arm Curl"],
    "glutes": ["Hip Thrust"],
    "abs": ["Plank", "Sit-up"],
    "cardio": ["Running", "Cycling", "Elliptical"],
}

BODY_PARTS = tuple(BASE_EXERCISES)


def build_catalog(custom: Iterable[tuple[str, str]] = ()) -> dict[str, list[str]]:
    """Body part -> exercise names, custom (body_part, name) pairs appended without duplicates.

    Unknown body parts get their own entry after the built-in ones.
    """
    catalog = {part: list(names) for part, names in BASE_EXERCISES.items()}
    for body_part, name in custom:
        names = catalog.setdefault(body_part, [])
        if name not in names:
            names.append(name)
    return catalog


def all_exercise_names(catalog: Mapping[str, Iterable[str]]) -> list[str]:
    seen: dict[str, None] = {}
    for names in catalog.values():
        for name in names:
            seen.setdefault(name, None)
    return list(seen)
