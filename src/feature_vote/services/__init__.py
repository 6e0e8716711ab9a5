# src/feature_vote/services/__init__.py
"""Business logic services for the Feature Vote application."""
