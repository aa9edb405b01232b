"""Batch matching execution modules."""

from .batch import run_batch_matching, BatchMatchingResult
from .jobs import BatchJob, BatchJobManager

__all__ = ['run_batch_matching', 'BatchMatchingResult', 'BatchJob', 'BatchJobManager']
