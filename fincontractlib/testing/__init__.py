"""Testing utilities for FincontractLib consumers."""

from .fixtures import RecordingVisitor, sample_contracts, deep_contract

__all__ = ['RecordingVisitor', 'sample_contracts', 'deep_contract']
