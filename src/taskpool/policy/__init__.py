"""Admission and eviction policies."""

from .base import AdmissionPolicy, Block, FavorNew, FavorPriority, Strategy, policy_for

__all__ = [
    "AdmissionPolicy",
    "Block",
    "FavorNew",
    "FavorPriority",
    "Strategy",
    "policy_for",
]
