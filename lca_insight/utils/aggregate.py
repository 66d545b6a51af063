from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from lca_insight.models import STAGE_ORDER, ImpactData, MaterialImpact, StageImpact

logger = logging.getLogger(__name__)


def by_stage(
    impacts: Iterable[ImpactData],
    stage_order: Sequence[str] = STAGE_ORDER,
) -> List[StageImpact]:
    """Sum CO2eq per life cycle stage, in ``stage_order``.

    Stages with a zero total produce no row. Impacts whose stage is not in
    ``stage_order`` do not contribute to any row.
    """

    totals: Dict[str, float] = {}
    for impact in impacts:
        totals[impact.stage] = totals.get(impact.stage, 0.0) + impact.co2eq

    unknown = sorted(stage for stage in totals if stage not in stage_order)
    if unknown:
        logger.warning("Dropping impacts with unrecognised stages: %s", ", ".join(unknown))

    return [
        StageImpact(stage=stage, co2eq=totals[stage])
        for stage in stage_order
        if totals.get(stage, 0.0) != 0.0
    ]


def by_material(impacts: Iterable[ImpactData]) -> List[MaterialImpact]:
    """Sum CO2eq per material, ordered by first appearance."""

    totals: Dict[str, float] = {}
    for impact in impacts:
        totals[impact.material] = totals.get(impact.material, 0.0) + impact.co2eq
    return [MaterialImpact(material=material, co2eq=value) for material, value in totals.items()]


def total(stage_aggregates: Iterable[StageImpact]) -> float:
    return sum((row.co2eq for row in stage_aggregates), 0.0)


__all__ = ["by_stage", "by_material", "total"]
