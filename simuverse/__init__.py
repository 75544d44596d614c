"""Data model for particle, fluid, noise and cloth simulations: meshes, lattices, constraints and packed uniform layouts."""

__version__ = "0.1.0"