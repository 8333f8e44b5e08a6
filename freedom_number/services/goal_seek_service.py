"""Goal-seek service for the extra lump sum needed today.

The solver treats the projection engine as a black box and bisects on the
terminal corpus, which is non-decreasing in the extra lump sum.
"""

import logging
from typing import Optional

from freedom_number.config import get_config
from freedom_number.schemas import GoalSeekResult, Scenario, SolveStatus

from .projection_service import ProjectionService

logger = logging.getLogger(__name__)


class GoalSeekService:
    """Service for solving the extra lump sum that exhausts the corpus at life age."""

    def __init__(self, projection_service: Optional[ProjectionService] = None):
        self.projection_service = projection_service or ProjectionService()
        cfg = get_config()
        self.initial_bracket = cfg.solver_initial_bracket
        self.max_expansions = cfg.solver_max_expansions
        self.max_iterations = cfg.solver_max_iterations
        self.tolerance = cfg.solver_tolerance

    def solve(
        self,
        scenario: Scenario,
        target_end_corpus: float = 0.0,
        tolerance: Optional[float] = None,
    ) -> GoalSeekResult:
        """Find the extra lump sum whose terminal corpus is within tolerance of target.

        Args:
            scenario: Scenario to solve
            target_end_corpus: Desired corpus at life age (normally zero)
            tolerance: Accepted absolute miss on the terminal corpus
                (defaults to the configured solver tolerance)

        Returns:
            GoalSeekResult with status CONVERGED, BEST_EFFORT (iteration budget
            exhausted, midpoint of the final bracket) or NOT_FOUND (no lump sum
            in the expanded bracket reaches the target).
        """
        if tolerance is None:
            tolerance = self.tolerance
        end_for = self.projection_service.terminal_corpus

        low = 0.0
        high = self.initial_bracket

        # Expand the bracket until the upper end overshoots the target
        end_high = end_for(scenario, high)
        expansions = 0
        while end_high < target_end_corpus and expansions < self.max_expansions:
            high *= 2
            end_high = end_for(scenario, high)
            expansions += 1
        logger.debug("Bracket [0, %.2f] after %d expansions", high, expansions)

        if end_high < target_end_corpus:
            logger.warning(
                "No lump sum up to %.2f reaches target end corpus %.2f", high, target_end_corpus
            )
            return GoalSeekResult(
                status=SolveStatus.NOT_FOUND, end_corpus=end_high, iterations=expansions
            )

        for i in range(self.max_iterations):
            mid = (low + high) / 2
            end_mid = end_for(scenario, mid)
            if abs(end_mid - target_end_corpus) <= tolerance:
                logger.debug("Converged on %.2f after %d bisections", mid, i + 1)
                return GoalSeekResult(
                    status=SolveStatus.CONVERGED,
                    lump_sum=mid,
                    end_corpus=end_mid,
                    iterations=expansions + i + 1,
                )
            if end_mid > target_end_corpus:
                high = mid
            else:
                low = mid

        mid = (low + high) / 2
        end_mid = end_for(scenario, mid)
        logger.warning(
            "Goal seek did not meet tolerance %.2f, best effort %.2f (end corpus %.2f)",
            tolerance,
            mid,
            end_mid,
        )
        return GoalSeekResult(
            status=SolveStatus.BEST_EFFORT,
            lump_sum=mid,
            end_corpus=end_mid,
            iterations=expansions + self.max_iterations,
        )
