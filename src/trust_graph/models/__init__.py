"""Models - the payment graph."""
