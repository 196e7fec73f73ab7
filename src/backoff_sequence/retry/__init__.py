"""Retry – executors that wait out the delays of a backoff sequence."""
from backoff_sequence.retry.policy import RetryExecutor, RetryPolicy, to_seconds
from backoff_sequence.retry.tenacity_adapter import TenacityRetryPolicy

__all__ = ["RetryExecutor", "RetryPolicy", "TenacityRetryPolicy", "to_seconds"]
