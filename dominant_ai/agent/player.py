"""
Automatic outpost-placing AI player.

This module provides the AutoPlayer class, the per-agent decision loop.
The host calls `update(delta_time)` every frame; whenever the decision
interval has elapsed the agent runs one decision cycle synchronously:

1. Skip the cycle if it cannot afford an outpost
2. Snapshot the board from the world
3. List the legal empty cells
4. Either pick a random cell, or filter candidates and run the planner
5. Ask the world to build the chosen outpost, and pay for it

The agent plans against its own snapshot, which may be stale by the time
the placement is executed; the executor has the final word.
"""
from __future__ import annotations
from collections import Counter
from typing import Callable, Dict, List, Optional
import logging
import random

from dominant_ai.core.board import BoardState, GridPosition, PlacementAction, INVALID_ACTION
from dominant_ai.core.constants import Faction
from dominant_ai.core.evaluator import DominantEvaluator
from dominant_ai.core.strategy import DominantStrategy
from dominant_ai.mcts.search import MCTSPlanner, generate_actions
from dominant_ai.agent.config import AgentConfig
from dominant_ai.agent.interfaces import Economy, GridProvider, PlacementExecutor, WorldQuery

logger = logging.getLogger(__name__)

PlacementListener = Callable[[PlacementAction], None]


class AutoPlayer:
    """
    AI agent that places outposts for one faction on a fixed interval.

    The agent follows the dominant strategy most of the time and places at
    random with probability `random_placement_chance`.
    """

    def __init__(
        self,
        config: AgentConfig,
        grid: GridProvider,
        world: WorldQuery,
        executor: PlacementExecutor,
        economy: Economy,
        planner: Optional[MCTSPlanner] = None,
        strategy: Optional[DominantStrategy] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the agent.

        Args:
            config: Agent configuration
            grid: Grid topology and coordinate conversion
            world: Source of the current outposts
            executor: Commits placements
            economy: Holds the faction's funds
            planner: Placement planner (built from config if omitted)
            strategy: Candidate filter (default weights if omitted)
            rng: Random generator (seeded from config.seed if omitted)
        """
        self.config = config
        self.grid = grid
        self.world = world
        self.executor = executor
        self.economy = economy

        self.rng = rng or random.Random(config.seed)
        mcts_config = config.mcts_config()
        self.planner = planner or MCTSPlanner(
            mcts_config,
            DominantEvaluator(placement_radius=config.placement_radius),
            self.rng,
        )
        self.strategy = strategy or DominantStrategy()

        self.is_active = True
        self.decision_timer = 0.0
        self.current_board: Optional[BoardState] = None
        self.last_action: PlacementAction = INVALID_ACTION

        self.stats: Counter = Counter()
        self._listeners: List[PlacementListener] = []

        logger.info("AutoPlayer initialized: faction=%s, difficulty=%s, money=%d",
                    config.faction.name, config.difficulty.name, self.money)

    @property
    def faction(self) -> Faction:
        return self.config.faction

    @property
    def money(self) -> int:
        return self.economy.balance(self.faction)

    def add_listener(self, listener: PlacementListener) -> None:
        """Register a callback invoked after every committed placement."""
        self._listeners.append(listener)

    def stop(self) -> None:
        self.is_active = False

    def resume(self) -> None:
        self.is_active = True

    def add_money(self, amount: int) -> None:
        self.economy.credit(self.faction, amount)

    def update(self, delta_time: float) -> bool:
        """
        Advance the decision timer.

        Args:
            delta_time: Seconds since the previous update

        Returns:
            True if a decision cycle ran during this update
        """
        if not self.is_active:
            return False

        self.decision_timer += delta_time
        if self.decision_timer < self.config.decision_interval:
            return False

        self.decision_timer = 0.0
        self.make_decision()
        return True

    def make_decision(self) -> PlacementAction:
        """
        Run one decision cycle.

        Returns:
            The committed action, or INVALID_ACTION if the cycle was skipped
            or the placement failed
        """
        self.stats["decisions"] += 1

        if not self.economy.can_afford(self.faction, self.config.store_cost):
            logger.debug("%s: not enough money (%d/%d)",
                         self.faction.name, self.money, self.config.store_cost)
            self.stats["skipped_funds"] += 1
            return INVALID_ACTION

        self.current_board = self.snapshot_board()
        cells = sorted(self.current_board.available_cells)
        if not cells:
            logger.debug("%s: no available cells", self.faction.name)
            self.stats["skipped_no_cells"] += 1
            return INVALID_ACTION

        if self.rng.random() < self.config.random_placement_chance:
            action = self.select_random_placement(cells)
            self.stats["random_choices"] += 1
            logger.debug("%s: random placement at %s", self.faction.name, action.grid_position)
        else:
            action = self.select_strategic_placement(self.current_board, cells)
            self.stats["strategic_choices"] += 1
            logger.debug("%s: strategic placement at %s (score: %.2f)",
                         self.faction.name, action.grid_position, action.score)

        if not action.is_valid:
            self.stats["no_action"] += 1
            return INVALID_ACTION

        return self.execute(action)

    def snapshot_board(self) -> BoardState:
        """Build a fresh board snapshot from the world."""
        board = BoardState(width=self.grid.width, height=self.grid.height)
        for outpost in self.world.current_outposts():
            board.add_outpost(outpost)
        board.available_cells = set(self.available_cells(board))
        return board

    def available_cells(self, board: BoardState) -> List[GridPosition]:
        """Legal cells that are not occupied on the given board, in grid order."""
        cells = []
        for x in range(self.grid.width):
            for y in range(self.grid.height):
                cell = (x, y)
                if not board.is_occupied(cell) and self.grid.is_cell_legal(cell):
                    cells.append(cell)
        return cells

    def select_random_placement(self, cells: List[GridPosition]) -> PlacementAction:
        if not cells:
            return INVALID_ACTION

        cell = self.rng.choice(cells)
        return PlacementAction(
            grid_position=cell,
            world_position=self.grid.grid_to_world(cell),
            faction=self.faction,
            score=0.0,
        )

    def select_strategic_placement(self, board: BoardState, cells: List[GridPosition]) -> PlacementAction:
        """Filter candidates with the dominant strategy, then search them."""
        candidates = generate_actions(cells, self.faction, self.grid.grid_to_world)
        filtered = self.strategy.filter_candidates(
            board, self.faction, candidates, self.config.max_candidates
        )
        return self.planner.find_best_placement(
            board,
            self.faction,
            [a.grid_position for a in filtered],
            self.grid.grid_to_world,
        )

    def execute(self, action: PlacementAction) -> PlacementAction:
        """
        Ask the world to build an outpost and pay for it.

        The cost is only charged when the executor accepts the placement.
        """
        if not self.executor.execute_placement(action.grid_position, self.faction):
            logger.info("%s: placement at %s rejected", self.faction.name, action.grid_position)
            self.stats["failed_placements"] += 1
            return INVALID_ACTION

        self.economy.deduct(self.faction, self.config.store_cost)
        self.stats["placements"] += 1
        self.last_action = action
        logger.info("%s placed outpost at %s", self.faction.name, action.grid_position)

        for listener in self._listeners:
            listener(action)
        return action

    def get_top_candidates(self, count: int = 5) -> List[PlacementAction]:
        """
        The best filtered candidates for the current board, without searching.

        Useful for debugging overlays.
        """
        board = self.snapshot_board()
        cells = sorted(board.available_cells)
        candidates = generate_actions(cells, self.faction, self.grid.grid_to_world)
        scored = self.strategy.score_candidates(board, self.faction, candidates)
        scored.sort(key=lambda item: item[1], reverse=True)
        return [action.with_score(score) for action, score in scored[:count]]

    def get_statistics(self) -> Dict[str, int]:
        return dict(self.stats)

    def __str__(self) -> str:
        return (f"AutoPlayer({self.faction.name}, {self.config.difficulty.name}, "
                f"{self.config.max_iterations} iterations)")
