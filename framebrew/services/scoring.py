"""Video quality scoring.

Scores are simulated: every dimension, including ``overall``, is drawn
independently from the configured range. A real implementation would
analyze the rendered media.
"""

import random

from framebrew.config.generation import ScoreRange
from framebrew.core.logging import get_logger
from framebrew.schemas.video import SCORE_FIELDS, Score

logger = get_logger(__name__)


class ScoreGenerator:
    """Produce score bundles for generated and rescored videos.

    Example:
        >>> scorer = ScoreGenerator(rng=random.Random(7))
        >>> score = scorer.generate()
        >>> 60 <= score.overall < 100
        True
    """

    def __init__(
        self,
        score_range: ScoreRange | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize score generator.

        Args:
            score_range: Inclusive low / exclusive high bound of each score
            rng: Random source, seeded in tests
        """
        self.score_range = score_range or ScoreRange()
        self._rng = rng or random.Random()

    def generate(self) -> Score:
        """Generate a fully populated score bundle."""
        low, high = self.score_range.low, self.score_range.high
        values = {name: self._rng.randrange(low, high) for name in SCORE_FIELDS}
        score = Score(**values)
        logger.debug("Score generated", overall=score.overall)
        return score


__all__ = ["ScoreGenerator"]
