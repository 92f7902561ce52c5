"""Duty rotation scheduler: weekly duty assignment across a calendar year."""
from dutyrota.engine.assignment import assign_people_to_weeks, regenerate
from dutyrota.engine.generator import generate_weeks

__version__ = "0.1.0"

__all__ = ["assign_people_to_weeks", "generate_weeks", "regenerate"]
