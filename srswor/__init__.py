"""
srswor: sorted Simple Random Sampling Without Replacement

Draws n distinct, sorted numbers from the interval [low, low+N-1] in O(n)
average time and constant extra space, after:
"An Efficient Algorithm for Sequential Random Sampling"
by Jeffrey Scott Vitter (ACM TOMS 13(1), 1987)

The key components:
- RandomSampler: block-wise sampler (Method D, Method A, Reject method)
- RandomSamplingAssistant: accept/reject decisions for one-pass scans
- MersenneTwister, DRand, AesEngine: uniform random engines
"""

from .params import SamplingRequest, NEG_ALPHA_INV, REJECT_DENSITY, MAX_BUFFER_SIZE
from .protocols import RandomSource
from .engine import RandomEngine, MersenneTwister, DRand, AesEngine, make_default_generator
from .sampler import Method, RandomSampler, sample, select_method
from .assistant import RandomSamplingAssistant, sample_array

__version__ = "0.1.0"
__all__ = [
    "SamplingRequest",
    "NEG_ALPHA_INV",
    "REJECT_DENSITY",
    "MAX_BUFFER_SIZE",
    "RandomSource",
    "RandomEngine",
    "MersenneTwister",
    "DRand",
    "AesEngine",
    "make_default_generator",
    "Method",
    "RandomSampler",
    "sample",
    "select_method",
    "RandomSamplingAssistant",
    "sample_array",
]
