"""Mating selection for bitstring NSGA-II."""

from nsga_bits.selection.crowded import crowded_better, crowded_tournament

__all__ = ["crowded_better", "crowded_tournament"]
