"""HTTP API for Frame Brew."""
