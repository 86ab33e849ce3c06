from __future__ import annotations

from collections import deque
from itertools import combinations
from unittest.mock import Mock, patch

import numpy as np
import pytest

from burrow.environment.generators import (
    DungeonGenerator,
    DungeonParams,
    GeneratedDungeon,
    GenerationPhase,
    NoRoomsGeneratedError,
    PlayerPlacementError,
)
from burrow.environment.grid import GridLayer, TileGrid
from burrow.environment.tile_types import (
    TILE_TYPE_ID_DOWN_STAIRS,
    TILE_TYPE_ID_FLOOR,
    TILE_TYPE_ID_UP_STAIRS,
    TILE_TYPE_ID_VOID,
    TILE_TYPE_ID_WALL,
)
from burrow.game.entities import EntityCategory
from burrow.game.game_world import GameWorld
from burrow.game.spawn_tables import SpawnTable
from burrow.util import rng
from burrow.util.coordinates import cell_center
from tests.helpers import SCENARIO_PARAMS, make_generator

SEEDS = [0, 1, 7, 42, 1234]

FLOOR_IDS = {TILE_TYPE_ID_FLOOR, TILE_TYPE_ID_UP_STAIRS, TILE_TYPE_ID_DOWN_STAIRS}


def generate(
    params: DungeonParams = SCENARIO_PARAMS, seed: int | None = 42
) -> tuple[GeneratedDungeon, TileGrid, GameWorld]:
    generator, grid, world = make_generator(params, seed)
    return generator.generate(), grid, world


def snapshot(
    dungeon: GeneratedDungeon, grid: TileGrid, world: GameWorld
) -> tuple[object, ...]:
    return (
        dungeon.rooms,
        grid.floor.tobytes(),
        grid.obstacle.tobytes(),
        [(a.name, a.position) for a in world.actors],
        dungeon.up_stairs,
        dungeon.down_stairs,
    )


class TestGeneratedLayout:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_rooms_do_not_overlap(self, seed: int) -> None:
        dungeon, _, _ = generate(seed=seed)
        for a, b in combinations(dungeon.rooms, 2):
            assert not a.intersects(b)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_every_attempt_is_accepted_or_rejected(self, seed: int) -> None:
        dungeon, _, _ = generate(seed=seed)
        assert len(dungeon.rooms) + dungeon.rejected == SCENARIO_PARAMS.max_rooms

    @pytest.mark.parametrize("seed", SEEDS)
    def test_rooms_fit_in_map(self, seed: int) -> None:
        dungeon, _, _ = generate(seed=seed)
        assert 1 <= len(dungeon.rooms) <= SCENARIO_PARAMS.max_rooms
        for room in dungeon.rooms:
            assert room.width >= 1 and room.height >= 1
            assert 0 <= room.x and room.x2 <= SCENARIO_PARAMS.map_width
            assert 0 <= room.y and room.y2 <= SCENARIO_PARAMS.map_height

    @pytest.mark.parametrize("seed", SEEDS)
    def test_room_interiors_are_floor(self, seed: int) -> None:
        dungeon, grid, _ = generate(seed=seed)
        for room in dungeon.rooms:
            for pos in room.interior_cells():
                assert grid.get_tile(GridLayer.FLOOR, pos) in FLOOR_IDS
                assert grid.get_tile(GridLayer.OBSTACLE, pos) is None

    @pytest.mark.parametrize("seed", SEEDS)
    def test_room_perimeters_are_wall_or_opening(self, seed: int) -> None:
        dungeon, grid, _ = generate(seed=seed)
        for room in dungeon.rooms:
            for pos in room.cells():
                if not room.is_on_perimeter(pos):
                    continue
                if grid.get_tile(GridLayer.FLOOR, pos) is None:
                    assert grid.get_tile(GridLayer.OBSTACLE, pos) == TILE_TYPE_ID_WALL
                else:
                    assert grid.get_tile(GridLayer.OBSTACLE, pos) is None

    @pytest.mark.parametrize("seed", SEEDS)
    def test_no_cell_is_both_floor_and_obstacle(self, seed: int) -> None:
        _, grid, _ = generate(seed=seed)
        both = (grid.floor != TILE_TYPE_ID_VOID) & (grid.obstacle != TILE_TYPE_ID_VOID)
        assert not both.any()

    @pytest.mark.parametrize("seed", SEEDS)
    def test_rooms_form_a_chain(self, seed: int) -> None:
        dungeon, _, _ = generate(seed=seed)
        assert len(dungeon.corridors) == len(dungeon.rooms) - 1
        for index, path in enumerate(dungeon.corridors):
            assert path[0] == dungeon.rooms[index].center()
            assert path[-1] == dungeon.rooms[index + 1].center()

    @pytest.mark.parametrize("seed", SEEDS)
    def test_every_room_reachable_from_player(self, seed: int) -> None:
        dungeon, grid, _ = generate(seed=seed)
        open_cells = grid.floor != TILE_TYPE_ID_VOID

        seen = {dungeon.up_stairs}
        queue = deque([dungeon.up_stairs])
        while queue:
            x, y = queue.popleft()
            for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if (
                    grid.in_bounds((nx, ny))
                    and open_cells[nx, ny]
                    and (nx, ny) not in seen
                ):
                    seen.add((nx, ny))
                    queue.append((nx, ny))

        for room in dungeon.rooms:
            assert room.center() in seen


class TestStairsAndPlayer:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_stairs_placement(self, seed: int) -> None:
        dungeon, grid, _ = generate(seed=seed)

        assert dungeon.rooms[-1].is_interior(dungeon.down_stairs)
        assert dungeon.rooms[0].is_interior(dungeon.up_stairs)
        up_tile = grid.get_tile(GridLayer.FLOOR, dungeon.up_stairs)
        assert up_tile == TILE_TYPE_ID_UP_STAIRS
        # With a single room the up stairs may land on the down stairs.
        if dungeon.down_stairs != dungeon.up_stairs:
            down_tile = grid.get_tile(GridLayer.FLOOR, dungeon.down_stairs)
            assert down_tile == TILE_TYPE_ID_DOWN_STAIRS

    @pytest.mark.parametrize("seed", SEEDS)
    def test_player_starts_alone_on_up_stairs(self, seed: int) -> None:
        dungeon, _, world = generate(seed=seed)

        assert dungeon.player.is_player
        assert dungeon.player.position == dungeon.up_stairs
        assert world.get_actors_at_location(dungeon.up_stairs) == [dungeon.player]
        assert world.get_player() is dungeon.player

    def test_existing_player_is_relocated(self) -> None:
        world = GameWorld()
        player = world.create_entity("Player", (0, 0))

        generator, _, _ = make_generator(SCENARIO_PARAMS, seed=3, world=world)
        dungeon = generator.generate()

        assert dungeon.player is player
        assert player.position == dungeon.up_stairs
        assert player.world_pos == cell_center(dungeon.up_stairs)
        players = [a for a in world.actors if a.is_player]
        assert players == [player]

    def test_player_survives_regeneration(self) -> None:
        world = GameWorld()
        first, _, _ = make_generator(SCENARIO_PARAMS, seed=5, world=world)
        player = first.generate().player

        # Entities from the first pass stay registered and still block cells.
        second, _, _ = make_generator(SCENARIO_PARAMS, seed=6, world=world)
        dungeon = second.generate()

        assert dungeon.player is player
        assert second.rooms[0].is_interior(player.position)

    def test_occupied_first_room_exhausts_retry_cap(self) -> None:
        params = DungeonParams(
            map_width=20,
            map_height=20,
            room_min_size=4,
            room_max_size=6,
            max_rooms=1,
            max_monsters_per_room=0,
            max_items_per_room=0,
            max_player_placement_attempts=5,
        )
        registry = Mock()
        registry.is_occupied.return_value = True
        registry.get_player.return_value = None
        grid = TileGrid(20, 20)

        generator = DungeonGenerator(params, grid, GameWorld(), registry)
        with pytest.raises(PlayerPlacementError) as exc_info:
            generator.generate()

        assert exc_info.value.attempts == 5
        assert registry.is_occupied.call_count == 5


class TestPopulation:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_per_room_counts_within_limits(self, seed: int) -> None:
        dungeon, _, world = generate(seed=seed)

        assert len(dungeon.populations) == len(dungeon.rooms)
        for room, population in zip(dungeon.rooms, dungeon.populations, strict=True):
            assert population.room == room
            assert len(population.monsters) <= SCENARIO_PARAMS.max_monsters_per_room
            assert len(population.items) <= SCENARIO_PARAMS.max_items_per_room
            for entity in (*population.monsters, *population.items):
                assert room.is_interior(entity.position)

        assert len(world.actors) == len(dungeon.spawned) + 1

    def test_occupancy_checks_go_through_spatial_index(self) -> None:
        generator, _, world = make_generator(SCENARIO_PARAMS, seed=42)
        index = world.actor_spatial_index

        with patch.object(
            index, "get_at_point", wraps=index.get_at_point
        ) as get_at_point:
            dungeon = generator.generate()

        # One lookup per spawned entity plus at least one for the player start.
        assert get_at_point.call_count >= len(dungeon.spawned) + 1
        x, y = dungeon.up_stairs
        get_at_point.assert_any_call(x, y)

    def test_custom_monster_table(self) -> None:
        grid = TileGrid(SCENARIO_PARAMS.map_width, SCENARIO_PARAMS.map_height)
        world = GameWorld()
        rng.init("trolls")
        DungeonGenerator(
            SCENARIO_PARAMS,
            grid,
            world,
            world,
            monster_table=SpawnTable.from_weights({"Troll": 1.0}),
        ).generate()

        monsters = [
            a.name for a in world.actors if a.kind.category is EntityCategory.MONSTER
        ]
        assert set(monsters) <= {"Troll"}


class TestDeterminism:
    def test_seeded_rng_reproduces_everything(self) -> None:
        assert snapshot(*generate(seed=99)) == snapshot(*generate(seed=99))

    def test_module_streams_reproduce_everything(self) -> None:
        rng.init("repeatable")
        first = snapshot(*generate(seed=None))
        rng.init("repeatable")
        second = snapshot(*generate(seed=None))
        assert first == second

    def test_different_seeds_differ(self) -> None:
        assert snapshot(*generate(seed=1)) != snapshot(*generate(seed=2))


class TestBoundaries:
    def test_single_attempt_yields_single_room(self) -> None:
        params = DungeonParams(
            map_width=40,
            map_height=40,
            room_min_size=4,
            room_max_size=8,
            max_rooms=1,
            max_monsters_per_room=2,
            max_items_per_room=2,
        )
        dungeon, grid, _ = generate(params, seed=17)

        assert len(dungeon.rooms) == 1
        assert dungeon.corridors == []
        (room,) = dungeon.rooms
        assert room.is_interior(dungeon.down_stairs)
        assert room.is_interior(dungeon.up_stairs)
        up_tile = grid.get_tile(GridLayer.FLOOR, dungeon.up_stairs)
        assert up_tile == TILE_TYPE_ID_UP_STAIRS

    def test_cramped_map_accepts_fewer_rooms_than_attempts(self) -> None:
        # Positions are drawn from [0, 5) so no two 4x4 rooms can keep a gap.
        params = DungeonParams(
            map_width=10,
            map_height=10,
            room_min_size=4,
            room_max_size=5,
            max_rooms=20,
            max_monsters_per_room=1,
            max_items_per_room=1,
        )
        dungeon, _, _ = generate(params, seed=8)

        assert len(dungeon.rooms) == 1
        assert dungeon.rejected == 19

    def test_no_rooms_raises(self) -> None:
        generator, _, _ = make_generator(SCENARIO_PARAMS, seed=1)
        with (
            patch.object(generator.sampler, "try_place", return_value=None),
            pytest.raises(NoRoomsGeneratedError, match="No rooms generated"),
        ):
            generator.generate()

    def test_phase_transitions(self) -> None:
        generator, _, _ = make_generator(SCENARIO_PARAMS, seed=1)
        assert generator.phase is GenerationPhase.IDLE
        generator.generate()
        assert generator.phase is GenerationPhase.DONE

    @pytest.mark.parametrize(
        "overrides",
        [
            {"room_min_size": 8, "room_max_size": 8},
            {"room_min_size": 2},
            {"map_width": 8},
            {"max_rooms": 0},
            {"max_monsters_per_room": -1},
            {"max_items_per_room": -1},
            {"max_player_placement_attempts": 0},
        ],
    )
    def test_invalid_parameters_rejected(self, overrides: dict[str, int]) -> None:
        values = {
            "map_width": 40,
            "map_height": 40,
            "room_min_size": 4,
            "room_max_size": 8,
            "max_rooms": 10,
            "max_monsters_per_room": 2,
            "max_items_per_room": 2,
        }
        params = DungeonParams(**{**values, **overrides})
        with pytest.raises(ValueError):
            DungeonGenerator(params, TileGrid(40, 40), GameWorld(), GameWorld())


def test_generation_leaves_far_edges_untouched() -> None:
    _, grid, _ = generate(seed=12)
    touched = (grid.floor != TILE_TYPE_ID_VOID) | (grid.obstacle != TILE_TYPE_ID_VOID)
    assert not np.any(touched[-1, :])
    assert not np.any(touched[:, -1])
