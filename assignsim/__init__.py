"""
assignsim - Assignment simulation engine.

Predicts how a roster of synthetic learner personas will experience a
sequenced assignment: per-problem success, time, confusion, engagement
and fatigue, rolled up into per-student outcomes and classroom analytics.
"""

__version__ = "0.1.0"
