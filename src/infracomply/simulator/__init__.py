"""Synthetic project book generation."""

from .projects import ProjectBookGenerator, BookProfile

__all__ = ["ProjectBookGenerator", "BookProfile"]
