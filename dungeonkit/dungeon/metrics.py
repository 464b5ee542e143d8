from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'rooms_dropped': 0,
        'placement_attempts': 0,
        'corridors': 0,
        'corridor_segments': 0,
        'pillars': 0,
        'torches': 0,
        'treasure_chests': 0,
        'runtime_ms': 0.0,
    }
