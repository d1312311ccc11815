"""Tests for the turn state machine."""

from __future__ import annotations

from collections.abc import Callable

from binary_dungeon.engine.loop import process_turn
from binary_dungeon.models import (
    Action,
    ActionType,
    Direction,
    Enemy,
    EnemyVariant,
    FinishInvest,
    GamePhase,
    GameState,
    GenerationContext,
    InvestXp,
    Move,
    NewGame,
    Position,
    StartGame,
    TechStackType,
    TileType,
    Wait,
    create_enemy,
    create_initial_game_state,
)
from binary_dungeon.models.events import BurnoutTick, DamageTaken, Moved, StunnedSkip, Waited


# =============================================================================
# Title
# =============================================================================


class TestTitlePhase:
    """Tests for the title screen."""

    def test_start_game_begins_run(self) -> None:
        """Test start_game spawns the first floor and starts exploring."""
        state = create_initial_game_state(ctx=GenerationContext(seed=7))

        process_turn(state, StartGame())

        assert state.phase == GamePhase.EXPLORING
        assert len(state.enemies) == 3
        assert len(state.items) == 2
        assert "Starting Milestone v1.0.0..." in state.log
        assert state.turn_count == 0

    def test_other_events_ignored(self) -> None:
        """Test the title screen ignores anything but start_game."""
        state = create_initial_game_state(ctx=GenerationContext(seed=7))
        before = state.player.position

        process_turn(state, Move(direction=Direction.EAST))
        process_turn(state, Wait())

        assert state.phase == GamePhase.TITLE
        assert state.player.position == before
        assert state.turn_count == 0


# =============================================================================
# Exploring
# =============================================================================


class TestMovement:
    """Tests for player movement."""

    def test_wait_ends_turn(self, exploring_state: GameState) -> None:
        """Test waiting completes a turn and decays Deadline."""
        process_turn(exploring_state, Wait())

        assert exploring_state.turn_count == 1
        assert exploring_state.player.dl == 49
        assert exploring_state.turn_events == [Waited()]
        assert exploring_state.log[-1] == "You wait..."

    def test_move_success(self, exploring_state: GameState) -> None:
        """Test a legal move updates the position and ends the turn."""
        process_turn(exploring_state, Move(direction=Direction.EAST))

        assert exploring_state.player.position == Position(x=6, y=5)
        assert exploring_state.turn_count == 1
        assert Moved(direction=Direction.EAST) in exploring_state.turn_events

    def test_wall_blocks(self, exploring_state: GameState) -> None:
        """Test walking into a wall is refused without ending the turn."""
        exploring_state.player.position = Position(x=1, y=1)

        process_turn(exploring_state, Move(direction=Direction.WEST))

        assert exploring_state.player.position == Position(x=1, y=1)
        assert exploring_state.turn_count == 0
        assert exploring_state.player.dl == 50
        assert exploring_state.log[-1] == "A wall blocks your way."

    def test_enemy_blocks(
        self,
        exploring_state: GameState,
        enemy_factory: Callable[..., Enemy],
    ) -> None:
        """Test the player cannot walk onto a living enemy."""
        exploring_state.enemies = [enemy_factory(6, 5)]

        process_turn(exploring_state, Move(direction=Direction.EAST))

        assert exploring_state.player.position == Position(x=5, y=5)
        assert exploring_state.turn_count == 0
        assert exploring_state.log[-1] == "A NullRef blocks your way."

    def test_invest_ignored_while_exploring(self, exploring_state: GameState) -> None:
        """Test between-run events do nothing mid-run."""
        exploring_state.total_xp = 100

        process_turn(exploring_state, InvestXp(stack=TechStackType.GO))
        process_turn(exploring_state, NewGame())

        assert exploring_state.tech_stacks.go == 0
        assert exploring_state.turn_count == 0


class TestStairs:
    """Tests for milestone progression."""

    def test_stairs_blocked_by_living_bugs(
        self,
        exploring_state: GameState,
        enemy_factory: Callable[..., Enemy],
    ) -> None:
        """Test stepping on the stairs with bugs left does not end the turn."""
        exploring_state.dungeon.tiles[5][6].type = TileType.STAIRS
        exploring_state.enemies = [enemy_factory(17, 8)]

        process_turn(exploring_state, Move(direction=Direction.EAST))

        assert exploring_state.player.position == Position(x=6, y=5)
        assert exploring_state.milestone.floor == 1
        assert exploring_state.turn_count == 0
        assert exploring_state.log[-1] == "1 bug(s) remain! Clear them first."

    def test_milestone_clear(self, exploring_state: GameState) -> None:
        """Test clearing a floor regenerates it and restores Deadline."""
        exploring_state.dungeon.tiles[5][6].type = TileType.STAIRS
        exploring_state.player.dl = 10
        exploring_state.burnout_mode = True

        process_turn(exploring_state, Move(direction=Direction.EAST))

        assert exploring_state.milestone.floor == 2
        assert exploring_state.milestone.version == "v1.1.0"
        assert exploring_state.highest_milestone == 2
        assert exploring_state.burnout_mode is False
        assert exploring_state.player.dl == 49
        assert exploring_state.turn_count == 1
        assert exploring_state.dungeon.width == 20
        assert exploring_state.dungeon.height == 10
        assert "Milestone v1.0.0 cleared!" in exploring_state.log
        assert "Deadline extended! DL restored." in exploring_state.log
        assert all(enemy.max_hp >= 1 for enemy in exploring_state.enemies)


class TestActions:
    """Tests for actions inside the turn loop."""

    def test_lethal_debug(
        self,
        exploring_state: GameState,
        enemy_factory: Callable[..., Enemy],
    ) -> None:
        """Test a killed enemy does not strike back."""
        enemy = enemy_factory(6, 5)
        exploring_state.enemies = [enemy]

        process_turn(exploring_state, Action(action=ActionType.DEBUG))

        assert not enemy.is_alive
        assert exploring_state.player.mh == 75
        assert exploring_state.player.xp == 7
        assert exploring_state.total_xp == 7
        assert exploring_state.turn_count == 1

    def test_refused_action_keeps_turn(self, exploring_state: GameState) -> None:
        """Test an action with no target leaves the turn open."""
        process_turn(exploring_state, Action(action=ActionType.DEBUG))

        assert exploring_state.turn_count == 0
        assert exploring_state.log[-1] == "No adjacent bug to debug."

    def test_hotfix_stun_cycle(
        self,
        exploring_state: GameState,
        ctx: GenerationContext,
    ) -> None:
        """Test Hotfix stuns the player and the next input is consumed."""
        enemy = create_enemy(ctx, EnemyVariant.MEMORY_LEAK, Position(x=6, y=5), hp_mult=2.0)
        exploring_state.enemies = [enemy]

        process_turn(exploring_state, Action(action=ActionType.HOTFIX))

        assert enemy.hp == 20
        assert exploring_state.player.stunned
        assert exploring_state.player.mh == 59

        process_turn(exploring_state, Move(direction=Direction.WEST))

        assert not exploring_state.player.stunned
        assert exploring_state.player.position == Position(x=5, y=5)
        assert exploring_state.player.mh == 53
        assert exploring_state.turn_count == 2
        assert exploring_state.turn_events[0] == StunnedSkip()
        assert DamageTaken(source=enemy.id, amount=6) in exploring_state.turn_events

    def test_refactor_resets_after_turn(
        self,
        exploring_state: GameState,
        enemy_factory: Callable[..., Enemy],
    ) -> None:
        """Test Refactor halves the enemy hit and expires at end of turn."""
        exploring_state.enemies = [enemy_factory(6, 5, EnemyVariant.SEGFAULT)]
        exploring_state.player.mh = 50

        process_turn(exploring_state, Action(action=ActionType.REFACTOR))

        assert exploring_state.player.mh == 51
        assert exploring_state.player.defending is False
        assert exploring_state.player.defense_multiplier == 1.0


class TestEndOfTurn:
    """Tests for end-of-turn bookkeeping."""

    def test_burnout_onset(self, exploring_state: GameState) -> None:
        """Test running out of Deadline starts burnout the same turn."""
        exploring_state.player.dl = 1

        process_turn(exploring_state, Wait())

        assert exploring_state.burnout_mode
        assert exploring_state.player.dl == 0
        assert exploring_state.player.mh == 78
        assert "BURNOUT MODE! Deadline exceeded! Enemies are empowered!" in exploring_state.log

    def test_google_it_spends_last_deadline(self, exploring_state: GameState) -> None:
        """Test spending Deadline to zero starts burnout at that turn's end."""
        exploring_state.player.dl = 5

        process_turn(exploring_state, Action(action=ActionType.GOOGLE_IT))

        assert exploring_state.player.dl == 0
        assert exploring_state.burnout_mode
        assert exploring_state.player.mh == 78
        assert exploring_state.turn_count == 1
        assert BurnoutTick(amount=2) in exploring_state.turn_events

    def test_game_over(self, exploring_state: GameState) -> None:
        """Test MH reaching zero ends the run."""
        exploring_state.player.dl = 0
        exploring_state.player.mh = 2
        exploring_state.burnout_mode = True

        process_turn(exploring_state, Wait())

        assert exploring_state.phase == GamePhase.GAME_OVER
        assert exploring_state.player.mh == 0
        assert exploring_state.log[-1] == "Mental Health depleted... You burned out."


# =============================================================================
# Between Runs
# =============================================================================


class TestBetweenRuns:
    """Tests for game over, XP investment and new runs."""

    def test_game_over_to_invest(self, exploring_state: GameState) -> None:
        """Test start_game on the game over screen opens investment."""
        exploring_state.phase = GamePhase.GAME_OVER

        process_turn(exploring_state, Wait())
        assert exploring_state.phase == GamePhase.GAME_OVER

        process_turn(exploring_state, StartGame())
        assert exploring_state.phase == GamePhase.XP_INVEST
        assert exploring_state.log[-1] == "Invest your XP in Tech Stacks!"

    def test_invest(self, exploring_state: GameState) -> None:
        """Test buying levels until the XP runs out."""
        exploring_state.phase = GamePhase.XP_INVEST
        exploring_state.total_xp = 30

        process_turn(exploring_state, InvestXp(stack=TechStackType.PYTHON))

        assert exploring_state.tech_stacks.python == 1
        assert exploring_state.available_xp == 0
        assert exploring_state.log[-1] == "Upgraded python to level 1!"

        process_turn(exploring_state, InvestXp(stack=TechStackType.PYTHON))

        assert exploring_state.tech_stacks.python == 1
        assert exploring_state.log[-1] == "Not enough XP! Need 60, have 0."

    def test_invest_max_level(self, exploring_state: GameState) -> None:
        """Test a maxed stack cannot be upgraded."""
        exploring_state.phase = GamePhase.XP_INVEST
        exploring_state.tech_stacks.rust = 10
        exploring_state.total_xp = 5000

        process_turn(exploring_state, InvestXp(stack=TechStackType.RUST))

        assert exploring_state.tech_stacks.rust == 10
        assert exploring_state.log[-1] == "rust is already at max level!"

    def test_invest_updates_title(self, exploring_state: GameState) -> None:
        """Test the title follows the summed stack level."""
        exploring_state.phase = GamePhase.XP_INVEST
        exploring_state.tech_stacks.python = 1
        exploring_state.tech_stacks.cpp = 1
        exploring_state.tech_stacks.rust = 1
        exploring_state.total_xp = 90 + 30

        process_turn(exploring_state, InvestXp(stack=TechStackType.GO))

        assert exploring_state.title == "Mid-level"

    def test_finish_invest_keeps_progression(self, exploring_state: GameState) -> None:
        """Test a new run resets the floor but keeps persistent data."""
        exploring_state.phase = GamePhase.XP_INVEST
        exploring_state.tech_stacks.cpp = 2
        exploring_state.total_xp = 120
        exploring_state.title = "Mid-level"
        exploring_state.turn_count = 40
        exploring_state.milestone.floor = 4
        exploring_state.player.mh = 3

        process_turn(exploring_state, FinishInvest())

        assert exploring_state.phase == GamePhase.EXPLORING
        assert exploring_state.tech_stacks.cpp == 2
        assert exploring_state.total_xp == 120
        assert exploring_state.title == "Mid-level"
        assert exploring_state.turn_count == 0
        assert exploring_state.milestone.floor == 1
        assert exploring_state.player.mh == 80
        assert exploring_state.player.xp == 0
        assert exploring_state.log == ["New run started! Good luck, developer."]
        assert len(exploring_state.enemies) <= 3

    def test_new_game_from_game_over(self, exploring_state: GameState) -> None:
        """Test new_game skips investment and starts a run."""
        exploring_state.phase = GamePhase.GAME_OVER

        process_turn(exploring_state, NewGame())

        assert exploring_state.phase == GamePhase.EXPLORING
        assert exploring_state.turn_count == 0
