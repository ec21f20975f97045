"""Shared API schemas."""

from .problem_details import ProblemDetails

__all__ = ["ProblemDetails"]
