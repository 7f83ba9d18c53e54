"""Wellness quiz to plan derivation: body composition, meals, training, supplements."""

__version__ = "0.1.0"
