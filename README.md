# simuverse

Pure-Python building blocks for real-time physics simulations. The package
prepares on the CPU the data that a GPU simulation consumes: geometry,
initial particle states, fluid lattices, cloth fabrics and their
graph-coloured constraint sets. Every uniform and storage record can be packed
into its little-endian binary layout with `pack()`.

It has no runtime dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `simuverse.enums`
  - `SimuType`, `FieldAnimationType` and `ParticleColorType`.
  - `FieldAnimationType.from_u32` maps unknown values to `CUSTOM`.
  - `ParticleColorType.from_u32` maps unknown values to `UNIFORM`.
- `simuverse.geometry`
  - `Plane` and `Sphere` grid meshes, with `TexturedVertex` and `MeshVertex` vertices.
  - `generate_circle_plane` and `generate_disc_plane` triangle fans. The disc uses `TangentVertex`.
- `simuverse.point3d`
  - `Point3D`, a small immutable 3D vector with `+`, `-`, `*` and `/`.
- `simuverse.textutil`
  - `remove_leading_indentation`.
  - `velocity_code_snippet`, which returns the WGSL velocity body for a field animation preset. It returns an empty string for presets that have none.
- `simuverse.particles`
  - `FieldUniform`, `ParticleUniform` and `TrajectoryParticle`.
  - `init_trajectory_particles`, which seeds a jittered particle grid.
  - `get_particles_data`, which sizes the grid for a canvas and pads it to `MAX_PARTICLE_COUNT`. It returns a `ParticleLayout`.
  - Both functions accept an optional `random.Random`.
- `simuverse.noise`
  - The Perlin permutation and gradient tables, and `permutation_hash_table`.
  - `is_same_f32` and `is_same_color`.
  - `TexGeneratorParams`, whose `update` reports whether anything changed.
- `simuverse.lattice`
  - The D2Q9 `LbmUniform`, `LatticeType` and `LatticeInfo` records.
  - `is_sd_sphere`.
  - `init_lattice_material` for the lid-driven cavity, Poiseuille and custom flows.
- `simuverse.fluid`
  - `LatticeGrid`, which places obstacles and external forces and returns the cells it rewrote.
  - `FluidInteraction`, which turns clicks and pointer strokes into those edits.
- `simuverse.pbd`
  - `StretchConstraint` and `BendingConstraint`.
  - `MeshColoring` groups and `BendingDynamicUniform`.
  - `ClothUniform`, with default solver parameters and control-panel updates.
- `simuverse.cloth`
  - `Particle`.
  - `ClothFabric.generate`, which builds the particles, the render mesh and the coloured stretch and bending constraints of a cloth.
  - The constraint generators and `color_groups`.

## Example

```python
from simuverse.cloth import ClothFabric
from simuverse.pbd import ClothUniform

fabric = ClothFabric.generate(50, 50, 800.0, 800.0, 0.001)
uniform = ClothUniform.for_grid(fabric.horizontal_num, fabric.vertical_num, 15)
payload = uniform.pack()  # bytes ready for a uniform buffer
```

```python
from simuverse.enums import FieldAnimationType
from simuverse.lattice import init_lattice_material

cells = init_lattice_material(160, 90, 1, FieldAnimationType.POISEUILLE)
```

## What it does not do

The package is a library only. It does not do any of the following:

- open a window
- render anything
- run the simulations on a GPU
- step a fluid or cloth solver in time

It provides no command-line program. The shader programs that consume this
data are not included.