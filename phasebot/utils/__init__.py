"""
Utility functions module.

Time Semantics:
- All state machine timing is expressed in float seconds
- The clock is sampled once per tick and reused for every decision that tick
- Production code uses a monotonic clock; tests and simulations advance a
  manual clock explicitly
"""
