"""Maintenance use cases."""

from ozza.application.usecase.maintenance.sweep_expired import (
    SweepExpiredResponse,
    SweepExpiredUseCase,
)

__all__ = ["SweepExpiredResponse", "SweepExpiredUseCase"]
