import math

import pytest

from simuverse.enums import FieldAnimationType
from simuverse.fluid import (
    MAX_EXTERNAL_FORCE,
    FluidInteraction,
    LatticeGrid,
)
from simuverse.lattice import OBSTACLE_RADIUS, LatticeType, init_lattice_material


def make_grid(ty=FieldAnimationType.CUSTOM, scale=1.0):
    return LatticeGrid.for_canvas(400, 300, scale, ty)


def test_for_canvas_dimensions():
    grid = make_grid()
    assert grid.lattice_pixel_size == math.ceil(2.0 * 1.0)
    assert grid.width == 400 // grid.lattice_pixel_size
    assert grid.height == 300 // grid.lattice_pixel_size
    assert len(grid.info) == grid.width * grid.height


def test_for_canvas_scale_rounds_up():
    grid = make_grid(scale=1.5)
    assert grid.lattice_pixel_size == math.ceil(3.0)
    assert grid.width == 400 // 3


def test_initial_materials_match_lattice_module():
    grid = make_grid(FieldAnimationType.POISEUILLE)
    expected = init_lattice_material(grid.width, grid.height, 1, FieldAnimationType.POISEUILLE)
    assert grid.info == expected


def test_workgroup_count_covers_lattice():
    grid = make_grid()
    wx, wy, wz = grid.workgroup_count()
    assert wz == 1
    assert (wx - 1) * 64 < grid.width <= wx * 64
    assert (wy - 1) * 4 < grid.height <= wy * 4


def test_add_obstacle_marks_circle():
    grid = make_grid()
    radius = int(OBSTACLE_RADIUS)
    start, rows = grid.add_obstacle(100, 75)
    assert start == (75 - radius) * grid.width
    assert len(rows) == 2 * radius * grid.width
    centre = grid.info[75 * grid.width + 100]
    assert centre.material == LatticeType.OBSTACLE
    assert grid.info[75 * grid.width + 100 + radius].material == LatticeType.OBSTACLE
    assert grid.info[75 * grid.width + 100 + radius + 1].material == LatticeType.BULK
    assert rows[75 * grid.width + 100 - start] == centre


def test_add_obstacle_out_of_range():
    grid = make_grid()
    with pytest.raises(ValueError):
        grid.add_obstacle(100, 3)
    with pytest.raises(ValueError):
        grid.add_obstacle(100, grid.height - 3)


def test_reset_restores_poiseuille():
    grid = make_grid(FieldAnimationType.POISEUILLE)
    original = list(grid.info)
    grid.add_obstacle(100, 75)
    assert grid.info != original
    grid.reset()
    assert grid.info == original


def test_reset_keeps_custom_obstacles():
    grid = make_grid(FieldAnimationType.CUSTOM)
    grid.add_obstacle(100, 75)
    grid.reset()
    assert grid.info[75 * grid.width + 100].material == LatticeType.OBSTACLE


def test_external_force_horizontal_stroke():
    grid = make_grid()
    writes = grid.add_external_force((40.0, 20.0), (20.0, 20.0))
    assert len(writes) == 20
    for index, record in writes:
        assert record.material == LatticeType.EXTERNAL_FORCE
        assert record.block_iter == 90
        assert record.vx > 0.0
        assert record.vy == pytest.approx(0.0, abs=1e-9)
        x, y = index % grid.width, index // grid.width
        assert 1 <= x < grid.width - 2
        assert 1 <= y < grid.height - 2


def test_external_force_is_capped():
    grid = make_grid()
    writes = grid.add_external_force((300.0, 200.0), (20.0, 20.0))
    assert writes
    _, record = writes[0]
    assert math.hypot(record.vx, record.vy) == pytest.approx(MAX_EXTERNAL_FORCE)


def test_external_force_zero_distance():
    grid = make_grid()
    assert grid.add_external_force((50.0, 50.0), (50.0, 50.0)) == []


def test_external_force_skips_border_cells():
    grid = make_grid()
    writes = grid.add_external_force((0.0, 0.0), (1.0, 1.0))
    assert writes == []


def test_external_force_does_not_change_materials():
    grid = make_grid()
    before = list(grid.info)
    grid.add_external_force((40.0, 20.0), (20.0, 20.0))
    assert grid.info == before


def test_external_force_needs_wide_cells():
    grid = make_grid(scale=0.5)
    assert grid.lattice_pixel_size == 1
    with pytest.raises(ValueError):
        grid.add_external_force((40.0, 20.0), (20.0, 20.0))


def test_touch_move_sequence():
    interaction = FluidInteraction(make_grid())
    assert interaction.touch_move((50.0, 50.0)) == []
    assert interaction.pre_pos == (50.0, 50.0)
    writes = interaction.touch_move((60.0, 50.0))
    assert writes
    assert all(r.material == LatticeType.EXTERNAL_FORCE for _, r in writes)
    assert interaction.pre_pos == (60.0, 50.0)


def test_touch_move_jump_and_negative():
    interaction = FluidInteraction(make_grid())
    interaction.touch_move((10.0, 10.0))
    assert interaction.touch_move((390.0, 290.0)) == []
    assert interaction.pre_pos == (390.0, 290.0)
    assert interaction.touch_move((-5.0, 10.0)) == []
    assert interaction.pre_pos == (0.0, 0.0)


def test_touch_begin_and_reset_clear_position():
    interaction = FluidInteraction(make_grid())
    interaction.touch_move((10.0, 10.0))
    interaction.touch_begin()
    assert interaction.pre_pos == (0.0, 0.0)
    interaction.touch_move((10.0, 10.0))
    interaction.reset()
    assert interaction.pre_pos == (0.0, 0.0)


def test_on_click_centre_and_edges():
    interaction = FluidInteraction(make_grid())
    assert interaction.on_click((0.0, 100.0)) is None
    assert interaction.on_click((10.0, 10.0)) is None
    result = interaction.on_click((200.0, 150.0))
    assert result is not None
    grid = interaction.grid
    x, y = 200 // grid.lattice_pixel_size, 150 // grid.lattice_pixel_size
    assert grid.info[y * grid.width + x].material == LatticeType.OBSTACLE
    assert result[0] == (y - int(OBSTACLE_RADIUS)) * grid.width