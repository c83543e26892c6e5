from .normalize import normalize_matrix

__all__ = ["normalize_matrix"]
