"""TurnEngine — resolves one discrete turn of the space grid game.

Architecture
------------
The engine is the authoritative owner of all game state: the grid, the
spawn pool, the player, the alien and asteroid slots and the GameMode
counters.  It is driven synchronously:

  1. Input: one of ``move_player_up/down/left/right()``.  Each resolves
     the player's move (terrain, collisions, attack-in-place) and then
     runs one orchestrated turn.

  2. ``do_turn()`` — the orchestrated turn, in order:
       - pulsar activation/deactivation (turn clock gated)
       - asteroid drift (turn clock gated)
       - alien moves
       - pulsar damage
       - collision pass (catches things that moved onto the player)
       - game over / level cleared evaluation
       - turn counter increment, snapshot publication

All randomness comes from one ``random.Random`` handed in (or seeded) at
construction, so a fixed seed replays the same game for the same inputs.

Game over is a state, not an exit: once ``GameState.GAME_OVER`` is
reached every entry point is a no-op returning that state.  The caller
decides whether to quit, restart or show a final screen.

Data flow:
  Engine --(publish_snapshot)--> display collaborator
  GameMode --(game_state_change / level_cleared / game_over)--> EventBus
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Iterable, Protocol

from loguru import logger

from spacegame.config import GameSettings, settings

from .collision import CollisionReport, CollisionSystem
from .entities import (
    ALIEN_DIRECTIONS,
    Alien,
    Asteroid,
    Direction,
    EntitySlots,
    Player,
)
from .errors import LevelGenerationError
from .game_mode import GameMode, GameState
from .grid import Grid
from .hazards import HazardScheduler
from .movement import MovementResolver
from .snapshot import Snapshot
from .spawn import SpawnPool

if TYPE_CHECKING:
    from spacegame.comms.event_bus import EventBus


class SnapshotSink(Protocol):
    """Anything that can receive the post-turn picture of the game."""

    def publish_snapshot(self, snapshot: Snapshot) -> None: ...


class TurnEngine:
    """Owns the game state and resolves player input into turns."""

    def __init__(
        self,
        display: SnapshotSink | None = None,
        config: GameSettings | None = None,
        rng: random.Random | int | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config if config is not None else settings
        if isinstance(rng, random.Random):
            self._rng = rng
        else:
            self._rng = random.Random(rng if rng is not None else self.config.seed)
        self._display = display

        self.game_mode = GameMode(event_bus, points_to_clear=self.config.points_to_clear)
        self.hazards = HazardScheduler(
            self._rng,
            cycle=self.config.pulsar_cycle,
            activate_phase=self.config.pulsar_activate_phase,
            deactivate_phase=self.config.pulsar_deactivate_phase,
            toggle_chance=self.config.pulsar_toggle_chance,
            damage=self.config.pulsar_damage,
        )
        self.collisions = CollisionSystem(attack_damage=self.config.player_attack_damage)

        self._grid: Grid | None = None
        self._movement: MovementResolver | None = None
        self._pool = SpawnPool()
        self._player: Player | None = None
        self._aliens: EntitySlots[Alien] = EntitySlots()
        self._asteroids: EntitySlots[Asteroid] = EntitySlots()

    # -- Read access ------------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._player is not None

    @property
    def state(self) -> GameState:
        return self.game_mode.state

    @property
    def grid(self) -> Grid:
        self._require_started()
        return self._grid

    @property
    def player(self) -> Player:
        self._require_started()
        return self._player

    @property
    def aliens(self) -> EntitySlots[Alien]:
        return self._aliens

    @property
    def asteroids(self) -> EntitySlots[Asteroid]:
        return self._asteroids

    @property
    def spawn_pool(self) -> SpawnPool:
        return self._pool

    @property
    def levels_cleared(self) -> int:
        return self.game_mode.levels_cleared

    @property
    def points_this_level(self) -> int:
        return self.game_mode.points_this_level

    @property
    def turn_number(self) -> int:
        return self.game_mode.turn_number

    def snapshot(self) -> Snapshot:
        self._require_started()
        return Snapshot.capture(
            self._grid, self._player, self._aliens, self._asteroids,
            state=self.game_mode.state.value,
            levels_cleared=self.game_mode.levels_cleared,
            points_this_level=self.game_mode.points_this_level,
            turn_number=self.game_mode.turn_number,
        )

    def get_state(self) -> dict:
        """Return serializable engine state (no tiles)."""
        state = self.game_mode.get_state()
        if self._player is not None:
            state["player"] = self._player.to_dict()
        state["aliens_alive"] = self._aliens.live_count()
        state["asteroids_left"] = self._asteroids.live_count()
        state["aliens"] = self._aliens.to_list()
        state["asteroids"] = self._asteroids.to_list()
        return state

    # -- Lifecycle --------------------------------------------------------------

    def start(self) -> Snapshot:
        """Generate the first level, spawn everything and publish it."""
        if self.started:
            return self.snapshot()
        self._build_level(player=None)
        logger.info(
            f"Game started: player at {self._player.position}, "
            f"{self._asteroids.live_count()} asteroids, "
            f"{self._aliens.live_count()} aliens"
        )
        return self._publish()

    def load_level(
        self,
        grid: Grid,
        player: Player,
        aliens: Iterable[Alien] = (),
        asteroids: Iterable[Asteroid] = (),
    ) -> Snapshot:
        """Install a hand-built level instead of a generated one.

        The spawn pool is rebuilt from the grid's free SPACE tiles.
        Session counters are left as they are.
        """
        self._install_grid(grid)
        self._player = player
        self._aliens = EntitySlots(aliens)
        self._asteroids = EntitySlots(asteroids)
        self._pool = SpawnPool.from_grid(grid, exclude=self._occupied())
        return self._publish()

    # -- Input entry points -----------------------------------------------------

    def move_player_up(self) -> GameState:
        return self.move_player(Direction.UP)

    def move_player_down(self) -> GameState:
        return self.move_player(Direction.DOWN)

    def move_player_left(self) -> GameState:
        return self.move_player(Direction.LEFT)

    def move_player_right(self) -> GameState:
        return self.move_player(Direction.RIGHT)

    def move_player(self, direction: Direction) -> GameState:
        """Resolve one player move, then run the turn it triggers."""
        if direction is Direction.NONE:
            raise ValueError("The player must move in a cardinal direction")
        self._require_started()
        if self.game_mode.is_over:
            logger.debug("Input ignored: game is over")
            return self.game_mode.state
        self.resolve_player_move(direction)
        return self.do_turn()

    def resolve_player_move(self, direction: Direction) -> CollisionReport:
        """Move the player one wrapped step without running a turn.

        Black holes block the move.  Moving onto a live alien is an attack:
        the collision pass damages it and the player is put back on its
        starting tile whether or not the alien survived.
        """
        player = self._player
        start_x, start_y = player.position
        dest_x, dest_y = self._movement.destination(start_x, start_y, direction)
        attacking = self._aliens.occupied(dest_x, dest_y)

        if self._movement.is_passable(dest_x, dest_y):
            player.set_position(dest_x, dest_y)

        report = self._resolve_collisions()

        if attacking:
            player.set_position(start_x, start_y)
        return report

    # -- Turn orchestration -----------------------------------------------------

    def do_turn(self) -> GameState:
        """Run one orchestrated turn and return the resulting state."""
        self._require_started()
        gm = self.game_mode
        if gm.is_over:
            return gm.state

        turn = gm.turn_number
        flipped = self.hazards.schedule(self._grid, turn)
        if flipped:
            logger.debug(f"Turn {turn}: {flipped} pulsar(s) toggled")
        if turn % self.config.asteroid_cycle == self.config.asteroid_phase:
            self._move_asteroids()
        self._move_aliens()
        pulsar = self.hazards.apply_damage(self._grid, self._player)
        if pulsar.lethal:
            logger.debug(f"Turn {turn}: player caught on an active pulsar")
        self._resolve_collisions()

        if self._player.destroyed:
            gm.end_game(self._player.hull_strength)
        elif gm.level_complete:
            self._next_level()

        gm.advance_turn()
        self._publish()
        return gm.state

    def _next_level(self) -> None:
        self.game_mode.clear_level()
        self._build_level(player=self._player)
        logger.info(
            f"Level {self.game_mode.levels_cleared + 1} ready: "
            f"{self._aliens.live_count()} aliens, hull {self._player.hull_strength}"
        )
        self._publish()
        self.game_mode.resume()

    # -- Level construction -----------------------------------------------------

    def _alien_count(self) -> int:
        return min(self.game_mode.levels_cleared, self.config.max_aliens)

    def _asteroid_count(self) -> int:
        return self.game_mode.points_remaining

    def _generate_playable_grid(self, required: int) -> tuple[Grid, SpawnPool]:
        cfg = self.config
        for attempt in range(1, cfg.max_level_attempts + 1):
            grid = Grid.generate(
                self._rng,
                width=cfg.grid_width,
                height=cfg.grid_height,
                black_hole_chance=cfg.black_hole_chance,
                pulsar_chance=cfg.pulsar_chance,
            )
            pool = SpawnPool.from_grid(grid)
            if len(pool) >= required:
                return grid, pool
            logger.warning(
                f"Level attempt {attempt}: only {len(pool)} free tiles, "
                f"need {required}; regenerating"
            )
        raise LevelGenerationError(
            f"No level with {required} free tiles after {cfg.max_level_attempts} attempts"
        )

    def _build_level(self, player: Player | None) -> None:
        """Generate grid + pool and place asteroids, aliens, then the player."""
        alien_count = self._alien_count()
        asteroid_count = self._asteroid_count()
        grid, pool = self._generate_playable_grid(1 + alien_count + asteroid_count)

        self._install_grid(grid)
        self._pool = pool
        self._asteroids = EntitySlots(pool.spawn_asteroids(self._rng, asteroid_count))
        self._aliens = EntitySlots(
            pool.spawn_aliens(self._rng, alien_count, self.config.alien_hull)
        )
        if player is None:
            self._player = pool.spawn_player(self._rng, self.config.player_hull)
        else:
            pool.place_player(self._rng, player)

    def _install_grid(self, grid: Grid) -> None:
        self._grid = grid
        if self._movement is None:
            self._movement = MovementResolver(grid)
        else:
            self._movement.set_grid(grid)

    def _occupied(self) -> set[tuple[int, int]]:
        taken = {alien.position for _, alien in self._aliens.live()}
        taken.update(rock.position for _, rock in self._asteroids.live())
        if self._player is not None:
            taken.add(self._player.position)
        return taken

    # -- Autonomous movement ----------------------------------------------------

    def _move_asteroids(self) -> None:
        """Drift every moving asteroid one step.

        An asteroid drifting into a black hole is destroyed and the whole
        asteroid population is respawned on tiles free at that moment;
        the pass ends there.
        """
        for index, asteroid in list(self._asteroids.live()):
            if asteroid.stationary:
                continue
            nx, ny = self._movement.destination(asteroid.x, asteroid.y, asteroid.direction)
            if not self._movement.is_passable(nx, ny):
                self._asteroids.clear(index)
                logger.debug(f"Asteroid {index} fell into the black hole at ({nx}, {ny})")
                self._respawn_asteroids()
                return
            asteroid.set_position(nx, ny)

    def _respawn_asteroids(self) -> None:
        count = self._asteroid_count()
        blocked = {alien.position for _, alien in self._aliens.live()}
        blocked.add(self._player.position)
        self._pool = SpawnPool.from_grid(self._grid, exclude=blocked)
        logger.debug(f"Respawning {count} asteroid(s) over {len(self._pool)} free tiles")
        self._asteroids = EntitySlots(self._pool.spawn_asteroids(self._rng, count))

    def _move_aliens(self) -> None:
        """Random walk for every live alien.

        An alien that would step onto the player stays put and rams it.
        Aliens bounce off black holes.
        """
        player = self._player
        damage = self.config.alien_collision_damage
        for _, alien in list(self._aliens.live()):
            direction = ALIEN_DIRECTIONS[self._rng.randrange(len(ALIEN_DIRECTIONS))]
            nx, ny = self._movement.destination(alien.x, alien.y, direction)
            if (nx, ny) == player.position:
                player.apply_damage(damage)
                continue
            alien.set_position(*self._movement.try_move(alien.x, alien.y, direction))

    # -- Helpers ----------------------------------------------------------------

    def _resolve_collisions(self) -> CollisionReport:
        report = self.collisions.resolve(self._player, self._asteroids, self._aliens)
        if report.empty:
            return report
        self.game_mode.add_points(report.points)
        logger.debug(
            f"Collisions: {report.points} asteroid(s), aliens hit {report.aliens_hit}, "
            f"destroyed {report.aliens_destroyed}"
        )
        return report

    def _publish(self) -> Snapshot:
        snap = self.snapshot()
        if self._display is not None:
            self._display.publish_snapshot(snap)
        return snap

    def _require_started(self) -> None:
        if self._player is None:
            raise RuntimeError("TurnEngine.start() has not been called")
