"""Survival (environmental selection) for bitstring NSGA-II."""

from nsga_bits.survival.environmental import environmental_selection

__all__ = ["environmental_selection"]
