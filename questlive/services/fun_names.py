"""Kahoot-style display names offered at check-in."""

from __future__ import annotations

import random
from typing import List, Optional

ADJECTIVES = [
    "Fluffy", "Speedy", "Brave", "Happy", "Lucky", "Mighty", "Swift", "Clever",
    "Jolly", "Daring", "Cosmic", "Electric", "Turbo", "Ninja", "Pixel", "Quantum",
    "Cyber", "Blazing", "Epic", "Stellar", "Mystic", "Noble", "Radiant", "Thunder",
    "Warp", "Neon", "Hyper", "Ultra", "Mega", "Super",
]

ANIMALS = [
    "Armadillo", "Penguin", "Tiger", "Dolphin", "Fox", "Panda", "Eagle", "Wolf",
    "Falcon", "Shark", "Dragon", "Phoenix", "Koala", "Otter", "Owl", "Jaguar",
    "Leopard", "Hawk", "Panther", "Lion", "Cheetah", "Raven", "Cobra", "Viper",
    "Griffin", "Unicorn", "Lynx", "Bear", "Raccoon", "Badger",
]


def generate_fun_name(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return f"{rng.choice(ADJECTIVES)} {rng.choice(ANIMALS)}"


def generate_fun_names(count: int = 5, rng: Optional[random.Random] = None) -> List[str]:
    """Return ``count`` distinct fun names."""

    count = max(0, min(count, len(ADJECTIVES) * len(ANIMALS)))
    names: List[str] = []
    seen = set()
    while len(names) < count:
        name = generate_fun_name(rng)
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


__all__ = ["ADJECTIVES", "ANIMALS", "generate_fun_name", "generate_fun_names"]
