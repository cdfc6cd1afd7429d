"""Application layer: ports (protocols) and observable state."""
