from .sizer import StopMode, build_plan, distances, levels, position_size

__all__ = ["StopMode", "build_plan", "distances", "levels", "position_size"]
