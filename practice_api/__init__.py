"""HTTP layer for the quiz practice tool."""
