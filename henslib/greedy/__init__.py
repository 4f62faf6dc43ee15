from .greedy import solve_greedy

__all__ = ['solve_greedy']
