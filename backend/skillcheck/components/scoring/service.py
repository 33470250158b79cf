"""Score aggregation over a candidate's stored answers."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from ..assessments.repository import sum_points_earned

logger = logging.getLogger("skillcheck.scoring")


def aggregate(db: Session, candidate_assessment_id: int) -> Decimal:
    """Final score for a candidate assessment.

    Sums ``points_earned`` over every stored answer, counting ungraded answers
    as zero, and returns ``Decimal("0.00")`` when nothing has been answered.
    """
    score = sum_points_earned(db, candidate_assessment_id)
    logger.debug("Aggregated score candidate_assessment_id=%s score=%s", candidate_assessment_id, score)
    return score
