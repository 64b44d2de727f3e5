"""Application rate limiting – per-client request quotas."""
from tabex.application.rate_limit.local import LocalTokenBucketRateLimiter
from tabex.application.rate_limit.rate_limiter import Quota, RateLimitResult, RateLimiter

__all__ = ["LocalTokenBucketRateLimiter", "Quota", "RateLimitResult", "RateLimiter"]
