from experiments.operators.base import Operator
from experiments.operators.fixed import FixedOperator
from experiments.operators.sweep import SweepOperator
from experiments.operators.tracker import TrackerOperator

__all__ = [
    "Operator",
    "FixedOperator",
    "SweepOperator",
    "TrackerOperator",
]
