"""
Gradient accumulation and parameter update methods.

Exports
-------
- ParamsErrorsAccumulator
- LearningRateMethod, MomentumMethod, AdaGradMethod, ADAMMethod
- ExponentialDecay, HyperbolicDecay
- ParamsOptimizer
"""

from ._accumulator import ParamsErrorsAccumulator
from ._learning_rate import LearningRateMethod, MomentumMethod
from ._adagrad import AdaGradMethod
from ._adam import ADAMMethod
from ._decay import ExponentialDecay, HyperbolicDecay
from ._params_optimizer import ParamsOptimizer

__all__ = [
    ParamsErrorsAccumulator.__name__,
    LearningRateMethod.__name__,
    MomentumMethod.__name__,
    AdaGradMethod.__name__,
    ADAMMethod.__name__,
    ExponentialDecay.__name__,
    HyperbolicDecay.__name__,
    ParamsOptimizer.__name__,
]
