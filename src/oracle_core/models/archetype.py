"""Archetype labels."""

from __future__ import annotations

from enum import Enum


class Archetype(str, Enum):
    SHADOW = "shadow"
    TRICKSTER = "trickster"
    OBSERVER = "observer"
    ECHO = "echo"
    SEER = "seer"
    GUARDIAN = "guardian"
    PROPHET = "prophet"
    CULTIST = "cultist"
