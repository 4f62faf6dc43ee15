from .transshipment import build_model, solve_targeting_model

__all__ = ['build_model', 'solve_targeting_model']
