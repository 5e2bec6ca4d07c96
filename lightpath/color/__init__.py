"""HSL colours, perceptual distance and gradient compression."""

from lightpath.color.clustering import CLUSTER_THRESHOLD, compress_gradient
from lightpath.color.hsl import BLACK, FALLBACK_GRADIENT, WHITE, Hsl, hsl_distance

__all__ = [
    "BLACK",
    "CLUSTER_THRESHOLD",
    "FALLBACK_GRADIENT",
    "WHITE",
    "Hsl",
    "compress_gradient",
    "hsl_distance",
]
