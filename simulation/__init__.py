"""Portfolio bookkeeping, market feeds and the daily simulation loop."""
