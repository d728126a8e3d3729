"""Terminal front end for the round engine."""
