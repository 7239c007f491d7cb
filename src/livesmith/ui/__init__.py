"""User interfaces built on top of the livesmith core."""
