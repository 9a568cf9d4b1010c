# ==============================================
# TOPIC 2: MATCHING (Classifier)
# ==============================================
#
# This package turns a user agent string into a
# ClassificationResult using a decoded Store.
#
# Modules:
# --------
# - result.py      → ClassificationResult + merge (compaction rule)
# - classifier.py  → Classifier.classify(store, user_agent)
#
# ==============================================

from .result import ClassificationResult, UNKNOWN, UNKNOWN_ICON, ROBOT_TYPE
from .classifier import Classifier, classify

__all__ = [
    "ClassificationResult",
    "UNKNOWN",
    "UNKNOWN_ICON",
    "ROBOT_TYPE",
    "Classifier",
    "classify",
]
