"""Vowel clusters in (F1, F2) space and label helpers."""
from dataclasses import dataclass
from typing import Tuple
import math

from lipsync.audio.models import UNVOICED


@dataclass(frozen=True)
class VowelCluster:
    """Bounding box and centroid of one vowel in formant space (Hz)."""
    label: str
    f1_range: Tuple[float, float]
    f2_range: Tuple[float, float]
    centroid: Tuple[float, float]
    
    def contains(self, f1: float, f2: float) -> bool:
        """Inclusive box membership test."""
        return (self.f1_range[0] <= f1 <= self.f1_range[1]
                and self.f2_range[0] <= f2 <= self.f2_range[1])
    
    def distance(self, f1: float, f2: float) -> float:
        return math.hypot(f1 - self.centroid[0], f2 - self.centroid[1])


# Tuned by hand for the lip-sync device; boxes overlap and do not always
# contain their own centroid. Index order is part of the history format.
VOWEL_CLUSTERS = (
    VowelCluster("a", (1200, 2000), (1800, 2800), (750, 1180)),
    VowelCluster("i", (400, 1000), (3000, 6000), (300, 2200)),
    VowelCluster("u", (200, 600), (1000, 3200), (350, 1100)),
    VowelCluster("e", (800, 1200), (2000, 4800), (520, 1900)),
    VowelCluster("o", (500, 1500), (900, 2000), (480, 900)),
)

NO_VOWEL = "n"  # speaking, but no vowel recognised
MOUTH_CLOSED = "N"  # sent when speaking stops
CLOSED_MOUTH_SHAPE = "xn"

VOWEL_LABELS = tuple(cluster.label for cluster in VOWEL_CLUSTERS)


def classify_vowel(f1: float, f2: float) -> int:
    """
    Map a formant pair to a cluster index.
    
    Candidates are the clusters whose box contains the point, plus a cluster
    whose centroid is exactly the point. The nearest centroid among them wins.
    
    Returns:
        Index into VOWEL_CLUSTERS, or UNVOICED (-1) when nothing matches
    """
    if f1 == 0 and f2 == 0:
        return UNVOICED
    
    best = UNVOICED
    best_distance = math.inf
    for index, cluster in enumerate(VOWEL_CLUSTERS):
        d = cluster.distance(f1, f2)
        if not (cluster.contains(f1, f2) or d == 0):
            continue
        if d < best_distance:
            best_distance = d
            best = index
    return best


def vowel_label(index: int) -> str:
    """Label for a cluster index; "n" for UNVOICED or anything unknown."""
    if 0 <= index < len(VOWEL_CLUSTERS):
        return VOWEL_CLUSTERS[index].label
    return NO_VOWEL


def upper_label(label: str) -> str:
    """Upper-case label ("A".."O", "N"); anything unknown becomes "N"."""
    upper = str(label).upper()
    if upper in ("A", "I", "U", "E", "O", "N"):
        return upper
    return MOUTH_CLOSED


def mouth_shape(label: str) -> str:
    """Mouth shape for a label: the vowel itself, or "xn" for a closed mouth."""
    if label in VOWEL_LABELS:
        return label
    return CLOSED_MOUTH_SHAPE
