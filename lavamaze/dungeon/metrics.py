from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'attempts': 0,
        'leaves': 0,
        'rooms': 0,
        'corridors': 0,
        'obstacles': 0,
        'hazards': 0,
        'landing_tiles': 0,
        'max_distance': 0,
        'exit_distance': 0,
        'collectible_placed': False,
        'collectible_skipped': False,
        'runtime_ms': 0.0,
    }
