"""Classification of deduplicated items into tiers and tags."""

from src.classifier.classifier import ClassificationResult, Classifier
from src.classifier.decision import (
    EXCLUDED,
    AuthoritativeSourceStep,
    Decision,
    DecisionContext,
    DecisionList,
    DecisionStep,
    ForceKeepStep,
    HeuristicSignalStep,
    QualityThresholdStep,
)
from src.classifier.models import TIER_ORDER, ClassifiedItem, InclusionReason, Tier


__all__ = [
    "EXCLUDED",
    "TIER_ORDER",
    "AuthoritativeSourceStep",
    "ClassificationResult",
    "ClassifiedItem",
    "Classifier",
    "Decision",
    "DecisionContext",
    "DecisionList",
    "DecisionStep",
    "ForceKeepStep",
    "HeuristicSignalStep",
    "InclusionReason",
    "QualityThresholdStep",
    "Tier",
]
