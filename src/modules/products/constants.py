"""Product domain constants.

Messages returned by the availability check.  They travel over the wire
to the order service and end up in the aggregated "not available" error,
so they are part of the public contract.
"""

AVAILABLE_MESSAGE = "Product available"
NOT_FOUND_MESSAGE = "Product not found"
INSUFFICIENT_STOCK_MESSAGE = "Insufficient stock. Available: {stock}"

# Upper bound for a single availability check or stock reduction.
MAX_QUANTITY = 1_000_000
